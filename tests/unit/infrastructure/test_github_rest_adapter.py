"""Tests for GitHubRestAdapter against a mocked GitHub API."""

import base64

import httpx
import pytest

from playground_importer.domain.entities import EntryKind, SkipRecord
from playground_importer.domain.exceptions import (
    ContentFetchError,
    GitHubRateLimitError,
    RepositoryNotFoundError,
    RepositoryUnavailableError,
)
from playground_importer.domain.value_objects import RepositoryReference
from playground_importer.infrastructure.github_rest_adapter import (
    GitHubRestAdapter,
    decode_content,
)
from playground_importer.services.entry_filter import check_entry

API = "https://api.github.com"


def _b64(text: str) -> str:
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    # GitHub wraps base64 content at 60 columns.
    return "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))


def _adapter(routes: dict[str, httpx.Response], seen: list[httpx.Request] | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return routes.get(request.url.path, httpx.Response(404, json={"message": "Not Found"}))

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubRestAdapter(client, token="secret-token", user_agent="test-agent")


@pytest.mark.unit
class TestGitHubRestAdapter:
    """Tests for the contents API adapter."""

    @pytest.mark.asyncio
    async def test_metadata_and_headers(self, ref: RepositoryReference) -> None:
        seen: list[httpx.Request] = []
        adapter = _adapter(
            {"/repos/acme/widgets": httpx.Response(200, json={"name": "widgets", "description": "Kit"})},
            seen,
        )
        metadata = await adapter.fetch_metadata(ref)

        assert metadata.name == "widgets"
        assert metadata.description == "Kit"
        headers = seen[0].headers
        assert headers["accept"] == "application/vnd.github.v3+json"
        assert headers["user-agent"] == "test-agent"
        assert headers["cache-control"] == "no-cache"
        assert headers["authorization"] == "Bearer secret-token"

    @pytest.mark.asyncio
    async def test_metadata_not_found(self, ref: RepositoryReference) -> None:
        adapter = _adapter({})
        with pytest.raises(RepositoryNotFoundError, match="not found or is private"):
            await adapter.fetch_metadata(ref)

    @pytest.mark.asyncio
    async def test_metadata_server_error(self, ref: RepositoryReference) -> None:
        adapter = _adapter({"/repos/acme/widgets": httpx.Response(500)})
        with pytest.raises(RepositoryUnavailableError, match="Failed to fetch repository information"):
            await adapter.fetch_metadata(ref)

    @pytest.mark.asyncio
    async def test_rate_limited(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {
                "/repos/acme/widgets": httpx.Response(
                    403, headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": "0"}
                )
            }
        )
        with pytest.raises(GitHubRateLimitError, match="1970-01-01 00:00:00 UTC"):
            await adapter.fetch_metadata(ref)

    @pytest.mark.asyncio
    async def test_forbidden_without_rate_limit(self, ref: RepositoryReference) -> None:
        adapter = _adapter({"/repos/acme/widgets": httpx.Response(403)})
        with pytest.raises(RepositoryUnavailableError):
            await adapter.fetch_metadata(ref)

    @pytest.mark.asyncio
    async def test_listing(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {
                "/repos/acme/widgets/contents/": httpx.Response(
                    200,
                    json=[
                        {"type": "file", "name": "README.md", "path": "README.md", "size": 12},
                        {"type": "dir", "name": "src", "path": "src", "size": 0},
                        {"type": "submodule", "name": "lib", "path": "lib", "size": 0},
                    ],
                )
            }
        )
        entries = await adapter.fetch_listing(ref, "")

        assert [(e.name, e.kind) for e in entries] == [
            ("README.md", EntryKind.FILE),
            ("src", EntryKind.DIR),
            ("lib", EntryKind.OTHER),
        ]
        assert entries[0].size == 12
        assert entries[2].raw_type == "submodule"

    @pytest.mark.asyncio
    async def test_listing_of_a_file_is_rejected(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {
                "/repos/acme/widgets/contents/src": httpx.Response(
                    200, json={"type": "file", "name": "src", "path": "src", "size": 1}
                )
            }
        )
        with pytest.raises(ContentFetchError):
            await adapter.fetch_listing(ref, "src")

    @pytest.mark.asyncio
    async def test_malformed_listing_item(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {"/repos/acme/widgets/contents/src": httpx.Response(200, json=[{"unexpected": True}])}
        )
        entries = await adapter.fetch_listing(ref, "src")

        assert [(e.name, e.kind, e.raw_type) for e in entries] == [
            ("<entry 0>", EntryKind.OTHER, "malformed")
        ]

    @pytest.mark.asyncio
    async def test_malformed_item_keeps_its_siblings(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {
                "/repos/acme/widgets/contents/": httpx.Response(
                    200,
                    json=[
                        {"type": "file", "name": "README.md", "path": "README.md", "size": 2},
                        {"type": "file", "name": "weird", "path": "weird", "size": None},
                        {"type": "dir", "name": "src", "path": "src", "size": 0},
                    ],
                )
            }
        )
        entries = await adapter.fetch_listing(ref, "")

        assert [(e.name, e.kind) for e in entries] == [
            ("README.md", EntryKind.FILE),
            ("weird", EntryKind.OTHER),
            ("src", EntryKind.DIR),
        ]
        assert entries[1].raw_type == "malformed"
        assert check_entry(entries[1]) == SkipRecord("weird", "Unsupported entry type (malformed)")

    @pytest.mark.asyncio
    async def test_listing_that_is_not_json(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {"/repos/acme/widgets/contents/src": httpx.Response(200, text="<html>")}
        )
        with pytest.raises(ContentFetchError, match="Malformed contents payload"):
            await adapter.fetch_listing(ref, "src")

    @pytest.mark.asyncio
    async def test_listing_not_found(self, ref: RepositoryReference) -> None:
        with pytest.raises(ContentFetchError):
            await _adapter({}).fetch_listing(ref, "missing")

    @pytest.mark.asyncio
    async def test_listing_rate_limited_is_a_fetch_error(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {
                "/repos/acme/widgets/contents/src": httpx.Response(
                    429, headers={"x-ratelimit-remaining": "0"}
                )
            }
        )
        with pytest.raises(ContentFetchError, match="rate limit"):
            await adapter.fetch_listing(ref, "src")

    @pytest.mark.asyncio
    async def test_file_content_is_decoded(self, ref: RepositoryReference) -> None:
        text = "export const greet = () => 'héllo';\n" * 5
        adapter = _adapter(
            {
                "/repos/acme/widgets/contents/src/greet.js": httpx.Response(
                    200,
                    json={
                        "type": "file",
                        "name": "greet.js",
                        "path": "src/greet.js",
                        "size": len(text),
                        "content": _b64(text),
                        "encoding": "base64",
                    },
                )
            }
        )
        assert await adapter.fetch_file_content(ref, "src/greet.js") == text

    @pytest.mark.asyncio
    async def test_reserved_characters_in_path_are_encoded(self, ref: RepositoryReference) -> None:
        seen: list[httpx.Request] = []
        adapter = _adapter(
            {
                "/repos/acme/widgets/contents/docs/notes#1 draft.md": httpx.Response(
                    200,
                    json={
                        "type": "file",
                        "name": "notes#1 draft.md",
                        "path": "docs/notes#1 draft.md",
                        "size": 5,
                        "content": _b64("hello"),
                        "encoding": "base64",
                    },
                )
            },
            seen,
        )
        assert await adapter.fetch_file_content(ref, "docs/notes#1 draft.md") == "hello"
        assert seen[0].url.raw_path == b"/repos/acme/widgets/contents/docs/notes%231%20draft.md"
        assert seen[0].url.fragment == ""

    @pytest.mark.asyncio
    async def test_file_without_content(self, ref: RepositoryReference) -> None:
        adapter = _adapter(
            {
                "/repos/acme/widgets/contents/big.bin": httpx.Response(
                    200,
                    json={"type": "file", "name": "big.bin", "path": "big.bin", "size": 9, "content": "", "encoding": "none"},
                ),
                "/repos/acme/widgets/contents/src": httpx.Response(200, json=[]),
            }
        )
        assert await adapter.fetch_file_content(ref, "big.bin") == ""
        assert await adapter.fetch_file_content(ref, "src") == ""

    @pytest.mark.asyncio
    async def test_missing_file(self, ref: RepositoryReference) -> None:
        with pytest.raises(ContentFetchError):
            await _adapter({}).fetch_file_content(ref, "package.json")

    @pytest.mark.asyncio
    async def test_network_error(self, ref: RepositoryReference) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        adapter = GitHubRestAdapter(client)
        with pytest.raises(ContentFetchError, match="Network error"):
            await adapter.fetch_file_content(ref, "README.md")
        with pytest.raises(RepositoryUnavailableError):
            await adapter.fetch_metadata(ref)


@pytest.mark.unit
class TestDecodeContent:
    def test_invalid_utf8_is_replaced(self) -> None:
        encoded = base64.b64encode(b"ok\xff").decode("ascii")
        assert decode_content(encoded) == "ok\ufffd"

    def test_invalid_base64(self) -> None:
        with pytest.raises(ContentFetchError):
            decode_content("abc")
