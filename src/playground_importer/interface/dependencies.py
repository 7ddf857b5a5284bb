"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx
from fastapi import Depends, Header

from playground_importer.domain.entities import Identity
from playground_importer.infrastructure.config import Settings, get_settings
from playground_importer.infrastructure.github_rest_adapter import GitHubRestAdapter
from playground_importer.infrastructure.memory_store import InMemoryPlaygroundStore
from playground_importer.services.import_repo import ImportRepositoryUseCase
from playground_importer.services.playgrounds import PlaygroundService
from playground_importer.services.tree_builder import RepositoryTreeBuilder

_http_client: httpx.AsyncClient | None = None
_store: InMemoryPlaygroundStore | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _store  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))
    if _store is None:
        _store = InMemoryPlaygroundStore()


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_store() -> InMemoryPlaygroundStore:
    assert _store is not None, "startup() was not called"
    return _store


def get_current_user(x_user_id: str | None = Header(default=None)) -> Identity | None:
    """Identity provider: the user id forwarded by the authenticating proxy."""
    if not x_user_id or not x_user_id.strip():
        return None
    return Identity(id=x_user_id.strip())


def get_import_use_case(
    store: InMemoryPlaygroundStore = Depends(get_store),
) -> ImportRepositoryUseCase:
    """Build the import use case with injected adapters."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=_http_client,
        token=token,
        api_url=settings.github_api_url,
        user_agent=settings.user_agent,
    )
    tree_builder = RepositoryTreeBuilder(
        github_adapter,
        max_depth=settings.max_tree_depth,
        max_file_size=settings.max_file_size_bytes,
        max_binary_size=settings.max_binary_size_bytes,
    )

    return ImportRepositoryUseCase(
        repo_fetcher=github_adapter,
        store=store,
        tree_builder=tree_builder,
    )


def get_playground_service(
    store: InMemoryPlaygroundStore = Depends(get_store),
) -> PlaygroundService:
    return PlaygroundService(store)
