# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis

from storefront.utils.settings import GATEWAY_MAX_ATTEMPTS


#domyslnie 1 proba - jedno zapytanie na operacje, retry tylko gdy ktos wlaczy w env
def http_retry(attempts: int | None = None):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts or GATEWAY_MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(requests.RequestException),
    )

def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )
