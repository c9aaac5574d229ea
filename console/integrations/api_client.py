"""
REST API CLIENT

Purpose:
- Thin JSON client over the TruePortMe backend
- Bearer token auth
- Uniform ApiError for HTTP and transport failures

Requirements:
• Base URL and timeout from configuration (never hardcoded per call)
• Timeout protection on every request
• No retry/backoff: failures surface to the caller immediately

Author: TruePortMe Admin Console
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests

from console.config import API_BASE_URL, API_TIMEOUT

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when an API call fails (HTTP error or transport failure)."""

    def __init__(self, status: Optional[int], message: str, payload: Optional[Mapping] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.payload = payload or {}

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401


@dataclass
class Pagination:
    page: int = 1
    limit: int = 20
    total: int = 0
    pages: int = 0

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]], limit: int = 20) -> "Pagination":
        data = (payload or {}).get("pagination") or {}
        return cls(
            page=int(data.get("page", 1) or 1),
            limit=int(data.get("limit", limit) or limit),
            total=int(data.get("total", 0) or 0),
            pages=int(data.get("pages", 0) or 0),
        )


class ApiClient:

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: Optional[str] = None,
        timeout: float = API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Dict[str, Any]:
        url = self._url(path)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ApiError(None, str(e)) from e

        body = self._decode(response)

        if not response.ok:
            message = body.get("message") if isinstance(body, dict) else None
            message = message or response.reason or f"HTTP {response.status_code}"
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(response.status_code, message, body if isinstance(body, dict) else None)

        return body if isinstance(body, dict) else {"data": body}

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[Any] = None) -> Dict[str, Any]:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Optional[Any] = None) -> Dict[str, Any]:
        return self.request("PUT", path, json=json)

    def delete(self, path: str, json: Optional[Any] = None) -> Dict[str, Any]:
        return self.request("DELETE", path, json=json)
