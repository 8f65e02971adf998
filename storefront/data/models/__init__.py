#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.subscriber import NewsletterSubscriberModel

__all__ = ["NewsletterSubscriberModel"]
