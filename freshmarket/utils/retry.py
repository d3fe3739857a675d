# freshmarket/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests

# tylko bledy transportu, odpowiedz 4xx/5xx nie jest ponawiana
RETRYABLE_ERRORS = (requests.ConnectionError, requests.Timeout)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
    )
