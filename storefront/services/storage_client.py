# storefront/services/storage_client.py
import requests

from storefront.domain.errors import WriteError
from storefront.utils.settings import STORE_URL, STORE_ANON_KEY, STORE_TIMEOUT_SECONDS, STORAGE_BUCKET
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class StorageClient:
    """File-blob storage of the hosted backend (gallery uploads)."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        bucket: str = STORAGE_BUCKET,
        timeout: float = STORE_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or STORE_URL).rstrip("/")
        self.api_key = STORE_ANON_KEY if api_key is None else api_key
        self.access_token = access_token
        self.bucket = bucket
        self.timeout = timeout

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path.lstrip('/')}"

    def upload(self, path: str, data: bytes, content_type: str = "application/octet-stream", upsert: bool = False) -> str:
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{path.lstrip('/')}"
        logger.info(f"StorageClient POST {url} ({len(data)} bytes)")

        try:
            resp = requests.post(
                url,
                data=data,
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.access_token or self.api_key}",
                    "Content-Type": content_type,
                    "x-upsert": "true" if upsert else "false",
                },
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Upload of {path} failed: {e}")
            raise WriteError("storage", "upload", str(e)) from e

        return self.public_url(path)
