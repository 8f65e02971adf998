# storefront/repos/subscriber_repo.py
from sqlalchemy.orm import Session

from storefront.data.models.subscriber import NewsletterSubscriberModel


class SubscriberRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_subscriber(self, subscriber: NewsletterSubscriberModel) -> NewsletterSubscriberModel:
        # unikalnosc emaila pilnuje baza - IntegrityError leci do serwisu
        self.db.add(subscriber)
        self.db.commit()
        self.db.refresh(subscriber)
        return subscriber

    def rollback(self):
        self.db.rollback()
