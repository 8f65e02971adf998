# storefront/services/storefront_client.py
import requests
from requests import RequestException

from storefront.domain.errors import ConfigurationError, GatewayError
from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    SHOPIFY_STORE_DOMAIN,
    SHOPIFY_STOREFRONT_ACCESS_TOKEN,
    SHOPIFY_API_VERSION,
    GATEWAY_TIMEOUT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

NOT_CONFIGURED = (
    "Storefront client not initialized. "
    "Please configure SHOPIFY_STORE_DOMAIN and SHOPIFY_STOREFRONT_ACCESS_TOKEN."
)


class StorefrontClient:
    """
    Klient GraphQL do Shopify Storefront API.
    Jedno wywolanie execute = jeden request (retry tylko gdy GATEWAY_MAX_ATTEMPTS > 1).
    """

    def __init__(
        self,
        store_domain: str | None = None,
        access_token: str | None = None,
        api_version: str | None = None,
        timeout: float | None = GATEWAY_TIMEOUT_SECONDS,
    ):
        self.store_domain = store_domain if store_domain is not None else SHOPIFY_STORE_DOMAIN
        self.access_token = access_token if access_token is not None else SHOPIFY_STOREFRONT_ACCESS_TOKEN
        self.api_version = api_version or SHOPIFY_API_VERSION
        self.timeout = timeout

        if not self.configured:
            logger.warning(NOT_CONFIGURED)

    @property
    def configured(self) -> bool:
        return bool(self.store_domain and self.access_token)

    @property
    def url(self) -> str:
        return f"https://{self.store_domain}/api/{self.api_version}/graphql.json"

    @http_retry()
    def _post(self, payload: dict) -> requests.Response:
        resp = requests.post(
            self.url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Storefront-Access-Token": self.access_token,
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp

    def execute(self, operation: str, query: str, variables: dict | None = None) -> dict:
        if not self.configured:
            raise ConfigurationError(NOT_CONFIGURED)

        logger.info(f"StorefrontClient POST {operation}")

        try:
            resp = self._post({"query": query, "variables": variables or {}})
            body = resp.json()
        except RequestException as e:
            logger.error(f"Storefront request {operation} failed: {e}")
            raise GatewayError(f"Failed to fetch data from Shopify: {e}") from e
        except ValueError as e:
            raise GatewayError(f"Failed to fetch data from Shopify: invalid JSON ({e})") from e

        if not isinstance(body, dict):
            raise GatewayError("Failed to fetch data from Shopify: unexpected response shape")

        errors = body.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = [e.get("message", "Unknown error") if isinstance(e, dict) else str(e) for e in errors]
            raise GatewayError(", ".join(messages))

        #odpowiedz jest opakowana w "data"
        data = body.get("data")
        if not isinstance(data, dict):
            raise GatewayError("Failed to fetch data from Shopify: response has no data")

        return data
