# storefront/data/models/subscriber.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Uuid

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class NewsletterSubscriberModel(Base):
    __tablename__ = "newsletter_subscribers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(320), nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    subscribed_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    unsubscribed_at = Column(DateTime(timezone=True), nullable=True)
    source = Column(String(50), nullable=True)
