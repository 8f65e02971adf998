# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api import create_app
from storefront.api.deps import get_storefront_api
from storefront.data.database import Base, get_db
from storefront.data.models import NewsletterSubscriberModel  # noqa: F401
from storefront.domain.schemas import Collection
from storefront.services.visitor_session import SessionRegistry
from tests.fakes import FakeStorefrontApi, MemoryCartIdStorage, MemoryStorageFactory, make_product, make_variant


@pytest.fixture
def catalog_products():
    return [
        make_product("silk-dress", "Silk Dress", price="120.00", product_type="Dresses", images=3),
        make_product("linen-shirt", "Linen Shirt", price="50.00", product_type="Tops"),
        make_product("wool-coat", "Wool Coat", price="300.00", product_type="Outerwear", available=False),
        make_product(
            "cotton-tee",
            "Cotton Tee",
            product_type="Tops",
            variants=[
                make_variant("gid://shopify/ProductVariant/tee-s-white", "20.00", options={"Size": "S", "Color": "White"}),
                make_variant("gid://shopify/ProductVariant/tee-m-white", "20.00", options={"Size": "M", "Color": "White"}),
                make_variant(
                    "gid://shopify/ProductVariant/tee-m-black",
                    "22.00",
                    available=False,
                    options={"Size": "M", "Color": "Black"},
                ),
            ],
        ),
    ]


@pytest.fixture
def fake_api(catalog_products):
    return FakeStorefrontApi(
        products=catalog_products,
        collections=[
            Collection(id="gid://shopify/Collection/1", title="Dresses", handle="dresses"),
            Collection(id="gid://shopify/Collection/2", title="Tops", handle="tops"),
        ],
    )


@pytest.fixture
def storage():
    return MemoryCartIdStorage()


@pytest.fixture
def storage_factory():
    return MemoryStorageFactory()


@pytest.fixture
def registry(fake_api, storage_factory):
    return SessionRegistry(api=fake_api, storage_factory=storage_factory, max_sessions=10, page_size=2)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(registry, fake_api, db_session):
    app = create_app(registry)
    app.dependency_overrides[get_storefront_api] = lambda: fake_api
    app.dependency_overrides[get_db] = lambda: db_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
