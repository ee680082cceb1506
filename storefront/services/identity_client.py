# storefront/services/identity_client.py
import requests

from storefront.domain.errors import DataUnavailable
from storefront.domain.schemas import CurrentUser
from storefront.utils.retry import http_retry
from storefront.utils.settings import STORE_URL, STORE_ANON_KEY, STORE_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class IdentityClient:
    """Resolves an access token to the signed-in user of the hosted auth service."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: float = STORE_TIMEOUT_SECONDS):
        self.base_url = (base_url or STORE_URL).rstrip("/")
        self.api_key = STORE_ANON_KEY if api_key is None else api_key
        self.timeout = timeout

    @http_retry()
    def _fetch_user(self, access_token: str) -> requests.Response:
        url = f"{self.base_url}/auth/v1/user"
        logger.info(f"IdentityClient GET {url}")
        return requests.get(
            url,
            headers={"apikey": self.api_key, "Authorization": f"Bearer {access_token}"},
            timeout=self.timeout,
        )

    def current_user(self, access_token: str | None) -> CurrentUser | None:
        if not access_token:
            return None

        try:
            resp = self._fetch_user(access_token)
        except requests.RequestException as e:
            raise DataUnavailable("auth", str(e)) from e

        if resp.status_code in (401, 403):
            return None

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise DataUnavailable("auth", str(e)) from e

        data = resp.json()
        return CurrentUser(id=data["id"], email=data.get("email"), access_token=access_token)
