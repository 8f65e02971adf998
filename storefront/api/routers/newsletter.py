# storefront/api/routers/newsletter.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import SubscribeIn
from storefront.services.newsletter_service import NewsletterService
from storefront.utils.logging import get_logger
from storefront.views.formatting import toast

logger = get_logger(__name__)

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@router.post("")
def subscribe(payload: SubscribeIn, response: Response, db: Session | None = Depends(get_db)):
    """
    Zapis do newslettera. Juz zapisany email dostaje ten sam komunikat co nowy.
    Walidacja emaila (422) dzieje sie zanim cokolwiek trafi do bazy.
    """
    service = NewsletterService(db)
    try:
        service.subscribe(payload.email, payload.source)
    except StorefrontError as e:
        logger.warning(f"Newsletter subscription failed: {e}")
        response.status_code = 400
        return {
            "subscribed": False,
            "toast": toast("error", "Something went wrong", "Please try again later."),
        }

    return {
        "subscribed": True,
        "toast": toast(
            "success",
            "Thank you for subscribing!",
            "We'll send you updates about our latest collections and offers.",
        ),
    }
