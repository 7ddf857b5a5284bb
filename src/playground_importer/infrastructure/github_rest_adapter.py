"""GitHub REST API adapter — implements the RepositoryFetcher port."""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from playground_importer.domain.entities import EntryKind, RemoteEntry, RepoMetadata
from playground_importer.domain.exceptions import (
    ContentFetchError,
    GitHubRateLimitError,
    RepositoryNotFoundError,
    RepositoryUnavailableError,
)
from playground_importer.domain.value_objects import RepositoryReference

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


# ── Payload models (validated at the boundary) ─────────────────────────────


class _RepoPayload(BaseModel):
    name: str | None = None
    description: str | None = None


class _ContentPayload(BaseModel):
    type: str
    name: str
    path: str = ""
    size: int = 0
    content: str | None = None
    encoding: str | None = None


_KIND_BY_TYPE: dict[str, EntryKind] = {"file": EntryKind.FILE, "dir": EntryKind.DIR}


def _to_entry(payload: _ContentPayload) -> RemoteEntry:
    return RemoteEntry(
        name=payload.name,
        path=payload.path or payload.name,
        kind=_KIND_BY_TYPE.get(payload.type, EntryKind.OTHER),
        size=payload.size,
        raw_type=payload.type,
    )


def _classify_item(item: Any, index: int) -> RemoteEntry:
    """Validate one listing item; malformed items become ``EntryKind.OTHER``."""
    try:
        return _to_entry(_ContentPayload.model_validate(item))
    except ValidationError:
        name = item.get("name") if isinstance(item, dict) else None
        if not isinstance(name, str) or not name:
            name = f"<entry {index}>"
        path = item.get("path") if isinstance(item, dict) else None
        logger.debug("Malformed listing item %r", item)
        return RemoteEntry(
            name=name,
            path=path if isinstance(path, str) and path else name,
            kind=EntryKind.OTHER,
            raw_type="malformed",
        )


def decode_content(encoded: str, encoding: str | None = "base64") -> str:
    """Decode a contents API ``content`` field into text."""
    if encoding not in (None, "base64"):
        return encoded
    try:
        raw = base64.b64decode(encoded)
    except (binascii.Error, ValueError) as exc:
        raise ContentFetchError(f"Invalid base64 content: {exc}") from exc
    return raw.decode("utf-8", errors="replace")


class GitHubRestAdapter:
    """Concrete RepositoryFetcher backed by the GitHub v3 contents API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        *,
        api_url: str = _GITHUB_API,
        user_agent: str = "VibeCode-Editor",
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
            "Cache-Control": "no-cache",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_metadata(self, ref: RepositoryReference) -> RepoMetadata:
        """GET /repos/{owner}/{repo} → RepoMetadata."""
        try:
            resp = await self._api_get(f"/repos/{ref.owner}/{ref.name}")
        except ContentFetchError as exc:
            raise RepositoryUnavailableError("Failed to fetch repository information") from exc

        try:
            data = _RepoPayload.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise RepositoryUnavailableError("Failed to fetch repository information") from exc

        return RepoMetadata(owner=ref.owner, name=data.name or ref.name, description=data.description)

    async def fetch_listing(self, ref: RepositoryReference, path: str = "") -> list[RemoteEntry]:
        """GET /repos/{owner}/{repo}/contents/{path} → [RemoteEntry].

        Raises :class:`ContentFetchError` unless the response is a directory
        listing (a JSON array).  Items are validated one by one, so a single
        malformed item does not hide its siblings.
        """
        resp = await self._contents_get(ref, path)
        payload = self._parse_json(resp, path)
        if not isinstance(payload, list):
            raise ContentFetchError(f"'{path or '/'}' is not a directory")
        return [_classify_item(item, index) for index, item in enumerate(payload)]

    async def fetch_file_content(self, ref: RepositoryReference, path: str) -> str:
        """GET /repos/{owner}/{repo}/contents/{path} → decoded text.

        Returns ``""`` when *path* is not a file or carries no content.
        """
        resp = await self._contents_get(ref, path)
        data = self._parse_json(resp, path)
        if isinstance(data, list):
            return ""
        try:
            payload = _ContentPayload.model_validate(data)
        except ValidationError as exc:
            raise ContentFetchError(f"Malformed contents payload for '{path}'") from exc
        if payload.type != "file" or not payload.content:
            return ""
        return decode_content(payload.content, payload.encoding)

    # ── Internals ───────────────────────────────────────────────────────

    async def _contents_get(self, ref: RepositoryReference, path: str) -> httpx.Response:
        endpoint = f"/repos/{ref.owner}/{ref.name}/contents/{quote(path.lstrip('/'), safe='/')}"
        try:
            return await self._api_get(endpoint)
        except RepositoryNotFoundError as exc:
            raise ContentFetchError(f"Not found: {path or '/'}") from exc
        except RepositoryUnavailableError as exc:
            raise ContentFetchError(str(exc)) from exc

    @staticmethod
    def _parse_json(resp: httpx.Response, path: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise ContentFetchError(f"Malformed contents payload for '{path or '/'}'") from exc

    async def _api_get(self, endpoint: str) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(url, headers=self._api_headers)
        except httpx.HTTPError as exc:
            raise ContentFetchError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise RepositoryNotFoundError("Repository not found or is private")

        if resp.status_code in (403, 429) and resp.headers.get("x-ratelimit-remaining", "") == "0":
            reset_raw = resp.headers.get("x-ratelimit-reset", "")
            try:
                reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                    "%Y-%m-%d %H:%M:%S UTC"
                )
            except (ValueError, OSError):
                reset_str = reset_raw or "unknown"
            raise GitHubRateLimitError(
                f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                "Set the GITHUB_TOKEN environment variable to increase the limit."
            )

        raise ContentFetchError(f"GitHub API returned HTTP {resp.status_code} for {url}")
