# storefront/utils/retry.py
import logging

import requests
from tenacity import before_sleep_log, retry, retry_if_exception, stop_after_attempt, wait_exponential

from storefront.utils.settings import HTTP_RETRY_ATTEMPTS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _is_transient(exc: BaseException) -> bool:
    """Connection problems, timeouts and 5xx answers; a 4xx will not improve on retry."""
    if isinstance(exc, requests.HTTPError):
        return exc.response is None or exc.response.status_code >= 500
    return isinstance(exc, requests.RequestException)


def http_retry(attempts: int = HTTP_RETRY_ATTEMPTS):
    """Retry policy for idempotent calls to the hosted backend."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(_is_transient),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
