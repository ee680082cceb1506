# storefront/services/store_client.py
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

import requests

from storefront.data.store import Store, as_rows
from storefront.domain.errors import DataUnavailable, WriteError
from storefront.utils.retry import http_retry
from storefront.utils.settings import STORE_URL, STORE_ANON_KEY, STORE_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _literal(value) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _encode(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Cannot serialize {type(value).__name__}")


class StoreClient(Store):
    """
    Store implementation talking to the hosted backend's REST endpoint
    (PostgREST dialect: /rest/v1/<collection>?field=eq.value).

    Every request carries a bounded timeout; a timeout counts as the failure
    of that call. Reads are retried on transport errors, writes are sent once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        timeout: float = STORE_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or STORE_URL).rstrip("/")
        self.api_key = STORE_ANON_KEY if api_key is None else api_key
        self.access_token = access_token
        self.timeout = timeout
        self.http = session or requests.Session()

    def _url(self, collection: str) -> str:
        return f"{self.base_url}/rest/v1/{collection}"

    def _headers(self, prefer: str | None = None) -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    @staticmethod
    def _params(filters, order_by=None) -> dict:
        params = {}
        for field, value in (filters or {}).items():
            if isinstance(value, (list, tuple, set)):
                joined = ",".join(f'"{_literal(v)}"' for v in value)
                params[field] = f"in.({joined})"
            else:
                params[field] = f"eq.{_literal(value)}"
        if order_by:
            direction = "desc" if order_by.startswith("-") else "asc"
            params["order"] = f"{order_by.lstrip('-')}.{direction}"
        return params

    @http_retry()
    def _get(self, url: str, params: dict) -> list:
        logger.info(f"StoreClient GET {url}")
        resp = self.http.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def query(self, collection, filters=None, order_by=None):
        try:
            return self._get(self._url(collection), self._params(filters, order_by))
        except requests.RequestException as e:
            logger.error(f"Query on {collection} failed: {e}")
            raise DataUnavailable(collection, str(e)) from e

    def insert(self, collection, rows):
        url = self._url(collection)
        body = json.dumps(as_rows(rows), default=_encode)
        logger.info(f"StoreClient POST {url}")
        try:
            resp = self.http.post(
                url,
                data=body,
                headers=self._headers("return=representation"),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.error(f"Insert into {collection} failed: {e}")
            raise WriteError(collection, "insert", str(e)) from e

    def update(self, collection, filters, patch):
        url = self._url(collection)
        logger.info(f"StoreClient PATCH {url}")
        try:
            resp = self.http.patch(
                url,
                params=self._params(filters),
                data=json.dumps(patch, default=_encode),
                headers=self._headers("return=representation"),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.error(f"Update of {collection} failed: {e}")
            raise WriteError(collection, "update", str(e)) from e

    def delete(self, collection, filters):
        url = self._url(collection)
        logger.info(f"StoreClient DELETE {url}")
        try:
            resp = self.http.delete(
                url,
                params=self._params(filters),
                headers=self._headers("return=representation"),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return len(resp.json())
        except requests.RequestException as e:
            logger.error(f"Delete from {collection} failed: {e}")
            raise WriteError(collection, "delete", str(e)) from e
