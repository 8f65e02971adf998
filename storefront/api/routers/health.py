# storefront/api/routers/health.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_storefront_api
from storefront.data import database
from storefront.services.storefront_api import StorefrontApi

router = APIRouter(tags=["health"])


@router.get("/health")
def health(api: StorefrontApi = Depends(get_storefront_api)):
    return {
        "status": "ok",
        "storefront_configured": api.client.configured,
        "database_configured": database.engine is not None,
    }
