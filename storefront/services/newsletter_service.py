# storefront/services/newsletter_service.py
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.subscriber import NewsletterSubscriberModel
from storefront.domain.errors import ConfigurationError, NewsletterError
from storefront.repos.subscriber_repo import SubscriberRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"

NOT_CONFIGURED = "Subscriber database not initialized. Please configure DATABASE_URL."


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    #psycopg2 -> pgcode, psycopg 3 -> sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNIQUE_VIOLATION:
        return True
    #sqlite (testy)
    return "UNIQUE constraint failed" in str(orig)


@dataclass
class SubscribeResult:
    created: bool
    subscriber: NewsletterSubscriberModel | None = None


class NewsletterService:
    """
    Zapis do newslettera. Duplikat emaila = sukces bez nowego rekordu,
    wywolujacy nie odroznia "zapisany" od "juz byl zapisany".
    """

    def __init__(self, db: Session | None):
        self.db = db

    def subscribe(self, email: str, source: str | None = None) -> SubscribeResult:
        if self.db is None:
            raise ConfigurationError(NOT_CONFIGURED)

        repo = SubscriberRepo(self.db)
        normalized = normalize_email(email)

        try:
            created = repo.create_subscriber(
                NewsletterSubscriberModel(email=normalized, source=source or None)
            )
        except IntegrityError as e:
            repo.rollback()
            if is_unique_violation(e):
                logger.info(f"Newsletter: {normalized} already subscribed")
                return SubscribeResult(created=False)
            logger.error(f"Newsletter insert failed: {e}")
            raise NewsletterError("Failed to subscribe to newsletter") from e
        except SQLAlchemyError as e:
            repo.rollback()
            logger.error(f"Newsletter insert failed: {e}")
            raise NewsletterError("Failed to subscribe to newsletter") from e

        logger.info(f"Newsletter: subscribed {normalized} (source={source})")
        return SubscribeResult(created=True, subscriber=created)
