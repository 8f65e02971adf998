# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()

#bez DATABASE_URL baza subskrybentow zostaje niezainicjalizowana
engine = create_engine(DATABASE_URL, pool_pre_ping=True) if DATABASE_URL else None
SessionLocal = (
    sessionmaker(bind=engine, autocommit=False, autoflush=False)
    if engine is not None
    else None
)

if engine is None:
    logger.warning("DATABASE_URL not set - newsletter subscriptions are disabled")


def get_db():
    if SessionLocal is None:
        yield None
        return

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
