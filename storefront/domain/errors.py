# storefront/domain/errors.py


class StorefrontError(Exception):
    """Bazowy blad aplikacji - lapany przez store'y i routery."""


class ConfigurationError(StorefrontError):
    """Brak credentiali - klient nie jest zainicjalizowany, zadnego requestu."""


class GatewayError(StorefrontError):
    """
    Blad zdalnego API: transport, zly ksztalt odpowiedzi albo userErrors.
    Dla wywolujacego wszystkie wygladaja tak samo.
    """


class CartNotInitializedError(StorefrontError):
    pass


class NewsletterError(StorefrontError):
    pass


class CartStorageError(StorefrontError):
    """Nie da sie odczytac albo zapisac ID koszyka (redis)."""
