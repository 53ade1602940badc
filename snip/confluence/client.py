"""A small client for the Confluence REST content API."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any

import requests

from snip.confluence.config import ConfluenceConfig

DEFAULT_TIMEOUT = 30.0


class ConfluenceError(Exception):
    """A request to Confluence failed or was answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


@dataclass
class Page:
    """A Confluence page."""

    id: str = ""
    title: str = ""
    type: str = ""
    space_key: str = ""
    body: str = ""
    representation: str = ""
    version: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Page:
        """Build a page from the API's JSON representation."""
        space = data.get("space") or {}
        storage = (data.get("body") or {}).get("storage") or {}
        version = data.get("version") or {}
        return cls(
            id=str(data.get("id") or ""),
            title=data.get("title") or "",
            type=data.get("type") or "",
            space_key=space.get("key") or "",
            body=storage.get("value") or "",
            representation=storage.get("representation") or "",
            version=int(version.get("number") or 0),
        )


class ConfluenceClient:
    """Creates, updates and searches pages in one Confluence space."""

    def __init__(
        self,
        config: ConfluenceConfig,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not config.url:
            raise ValueError("Confluence URL is not configured")
        if not config.email:
            raise ValueError("email is not configured")
        if not config.api_token:
            raise ValueError("API token is not configured")
        self.config = config
        self.base_url = config.url
        self.session = session or requests.Session()
        self.timeout = timeout

    def _auth_header(self) -> str:
        credentials = f"{self.config.email}:{self.config.api_token}".encode()
        return "Basic " + base64.b64encode(credentials).decode("ascii")

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/wiki/rest/api/{endpoint}"

    def _request(
        self, method: str, url: str, body: Any = None, json_content: bool = True
    ) -> Any:
        headers = {"Authorization": self._auth_header(), "Accept": "application/json"}
        if json_content:
            headers["Content-Type"] = "application/json"
        data = json.dumps(body) if body is not None else None
        try:
            response = self.session.request(
                method, url, data=data, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise ConfluenceError(f"request failed: {exc}") from exc
        if not 200 <= response.status_code < 300:
            raise ConfluenceError(
                f"Confluence API error (status {response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ValueError(f"failed to parse response: {exc}") from exc

    def _storage(self, content: str) -> dict[str, Any]:
        return {"storage": {"value": content, "representation": "storage"}}

    def create_page(self, title: str, content: str, parent_id: str = "") -> Page:
        """Create a page in the configured space, under ``parent_id`` if given."""
        body: dict[str, Any] = {
            "type": "page",
            "title": title,
            "space": {"key": self.config.space},
            "body": self._storage(content),
        }
        if parent_id:
            body["ancestors"] = [{"id": parent_id}]
        return Page.from_dict(self._request("POST", self._url("content"), body))

    def update_page(self, page_id: str, title: str, content: str) -> Page:
        """Replace a page's title and content, bumping its version."""
        current = Page.from_dict(
            self._request(
                "GET", self._url(f"content/{page_id}?expand=body.storage,version")
            )
        )
        body = {
            "id": page_id,
            "type": "page",
            "title": title,
            "body": self._storage(content),
            "version": {"number": current.version + 1},
        }
        return Page.from_dict(
            self._request("PUT", self._url(f"content/{page_id}"), body)
        )

    def search_pages(self, query: str) -> list[Page]:
        """Return pages of the configured space whose text matches ``query``."""
        url = self._url(
            f'content/search?cql=space={self.config.space}+and+text~"{query}"'
        )
        data = self._request("GET", url, json_content=False)
        return [Page.from_dict(item) for item in (data or {}).get("results") or []]