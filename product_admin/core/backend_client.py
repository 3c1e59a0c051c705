# product_admin/core/backend_client.py
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class BackendRequestError(RuntimeError):
    """
    Raised when the catalog backend cannot be reached or answers non-2xx.

    `message` is the backend's own `message` field when it sent one.
    """

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int | None = None,
        message: str | None = None,
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.message = message
        reason = message or "no response"
        super().__init__(f"{method} {url} failed ({status_code}): {reason}")


class BackendClient:
    """
    Thin client for the catalog REST backend.

    Endpoints:
      - GET  /category       -> {"data": [...]}
      - POST /product        -> {"message": ...}
      - PUT  /product/{id}   -> {"message": ...}
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, json: Any = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            raise BackendRequestError(method, url, message=str(e)) from e

        if not r.ok:
            try:
                body = r.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message")
            else:
                message = r.text or None
            raise BackendRequestError(method, url, r.status_code, message)

        logger.debug("%s %s -> %s", method, url, r.status_code)
        try:
            body = r.json()
        except ValueError as e:
            raise BackendRequestError(method, url, r.status_code, "invalid JSON response") from e
        if not isinstance(body, dict):
            raise BackendRequestError(method, url, r.status_code, "unexpected response body")
        return body

    # ----- Categories -----

    def list_categories(self) -> list[dict[str, Any]]:
        return self._request("GET", "/category").get("data") or []

    # ----- Products -----

    def create_product(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/product", json=payload)

    def update_product(self, product_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/product/{product_id}", json=payload)
