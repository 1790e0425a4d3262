"""Payload CMS integration: config and REST API client.

Implements the same query/update surface as the local
:class:`~schoerke.content.store.ContentStore`, so maintenance
procedures can run against the live CMS.
"""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from pydantic import BaseModel

from schoerke.content.store import FindResult, Record, Where

logger = logging.getLogger(__name__)


class PayloadAPIError(Exception):
    """The CMS answered with an error or could not be reached."""

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class PayloadConfig(BaseModel):
    """Connection settings for the Payload CMS REST API."""

    url: str = ""
    api_key: str = ""
    auth_collection: str = "users"
    timeout: int = 30

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.api_key)

    @classmethod
    def from_env(cls) -> PayloadConfig:
        """Create config from environment variables."""
        return cls(
            url=os.environ.get("PAYLOAD_URL", ""),
            api_key=os.environ.get("PAYLOAD_API_KEY", ""),
        )


def encode_where(where: Where | None) -> dict[str, str]:
    """Translate an equality filter into Payload's ``where[...]`` query params.

    A ``None`` condition matches a missing or empty field, like
    :func:`~schoerke.content.store.matches` does locally, so it becomes
    an ``or`` of ``exists=false`` and ``equals=""``.  Each such ``or``
    sits in its own ``and`` clause so several of them can be combined.
    """
    params: dict[str, str] = {}
    clause = 0
    for field, expected in (where or {}).items():
        if expected is None:
            prefix = f"where[and][{clause}][or]"
            params[f"{prefix}[0][{field}][exists]"] = "false"
            params[f"{prefix}[1][{field}][equals]"] = ""
            clause += 1
        else:
            params[f"where[{field}][equals]"] = str(expected)
    return params


class PayloadAPIClient:
    """Client for the Payload CMS REST API.

    Authenticates with a collection API key and talks JSON via urllib.
    """

    def __init__(self, config: PayloadConfig) -> None:
        self.config = config
        self.base_url = config.url.rstrip("/")

    def _request(
        self,
        method: str,
        path: str,
        data: dict | None = None,
        params: dict[str, str] | None = None,
    ) -> dict:
        """Make an authenticated request to the REST API."""
        url = f"{self.base_url}/api{path}"
        if params:
            url = f"{url}?{urllib.parse.urlencode(params)}"

        body = json.dumps(data).encode("utf-8") if data is not None else None
        req = urllib.request.Request(
            url,
            data=body,
            method=method,
            headers={
                "Authorization": f"{self.config.auth_collection} API-Key {self.config.api_key}",
                "Content-Type": "application/json",
            },
        )

        try:
            with urllib.request.urlopen(req, timeout=self.config.timeout) as resp:
                return json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise PayloadAPIError(
                f"{method} {path} failed with HTTP {exc.code}", status=exc.code, body=detail
            ) from exc
        except urllib.error.URLError as exc:
            raise PayloadAPIError(f"{method} {path} failed: {exc.reason}") from exc

    def find(
        self,
        collection: str,
        *,
        where: Where | None = None,
        limit: int = 10,
        page: int = 1,
    ) -> FindResult:
        """Fetch one page of a collection."""
        params = {"limit": str(limit), "page": str(page), "depth": "0"}
        params.update(encode_where(where))
        result = self._request("GET", f"/{collection}", params=params)
        return FindResult(
            docs=result.get("docs", []),
            total_docs=result.get("totalDocs", 0),
            limit=result.get("limit", limit),
            page=result.get("page", page),
            total_pages=result.get("totalPages", 1) or 1,
        )

    def get(self, collection: str, record_id: int) -> Record | None:
        """Fetch a record by id, or None if the CMS reports 404."""
        try:
            return self._request("GET", f"/{collection}/{record_id}", params={"depth": "0"})
        except PayloadAPIError as exc:
            if exc.status == 404:
                return None
            raise

    def create(self, collection: str, data: Record) -> Record:
        """Create a record and return it as stored."""
        result: dict[str, Any] = self._request("POST", f"/{collection}", data)
        return result.get("doc", result)

    def update(self, collection: str, record_id: int, patch: Record) -> Record:
        """Apply a partial patch to a record."""
        result: dict[str, Any] = self._request("PATCH", f"/{collection}/{record_id}", patch)
        return result.get("doc", result)

    def delete(self, collection: str, record_id: int) -> None:
        """Delete a record."""
        self._request("DELETE", f"/{collection}/{record_id}")
        logger.debug("Deleted %s/%s", collection, record_id)
