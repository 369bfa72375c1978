"""
Thin HTTP client for the OpenSearch-compatible engine.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import HTTPBasicAuth
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class SearchClientError(Exception):
    """Base class for failures talking to the search engine."""


class TransportError(SearchClientError):
    """Connection failure or non-2xx reply from the engine."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(SearchClientError):
    """The engine replied with a body that is not JSON."""


class IndexCreation(BaseModel):
    created: bool
    status_code: int
    body: str


class SearchClient:
    """Issues authenticated requests against a single index."""

    def __init__(self, base_url: str, index: str, username: str, password: str,
                 timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.index = index
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = HTTPBasicAuth(username, password)
        self.session.headers.update({"Content-Type": "application/json"})

    @classmethod
    def from_settings(cls, settings) -> "SearchClient":
        return cls(settings.base_url, settings.index, settings.username,
                   settings.password, timeout=settings.timeout)

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/{self.index}{path}"

    def _send(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = self._url(path)
        logger.debug(f"{method} {url}")
        try:
            return self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

    def _decode(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        resp = self._send(method, path, body)
        logger.info(f"OpenSearch {method} {path or '/'} -> {resp.status_code}")
        if not 200 <= resp.status_code < 300:
            raise TransportError(f"OpenSearch replied {resp.status_code}: {resp.text}",
                                 status_code=resp.status_code, body=resp.text)
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"Could not decode OpenSearch response: {e}") from e

    def create_index(self, settings: Dict[str, Any], mappings: Dict[str, Any]) -> IndexCreation:
        """Create the index; a rejected request is reported, not raised."""
        resp = self._send("PUT", "", {"settings": settings, "mappings": mappings})
        return IndexCreation(
            created=resp.status_code in (200, 201),
            status_code=resp.status_code,
            body=resp.text,
        )

    def get_mapping(self) -> Any:
        return self._decode("GET", "/_mapping")

    def search(self, query: Dict[str, Any]) -> Any:
        return self._decode("POST", "/_search", query)

    def close(self) -> None:
        self.session.close()
