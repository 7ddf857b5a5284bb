"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from playground_importer.domain.entities import RemoteEntry, RepoMetadata
from playground_importer.domain.value_objects import RepositoryReference


class RepositoryFetcher(Protocol):
    """Abstract contract for reading a repository through the GitHub contents API."""

    async def fetch_metadata(self, ref: RepositoryReference) -> RepoMetadata:
        """Return high-level repository metadata."""
        ...

    async def fetch_listing(self, ref: RepositoryReference, path: str = "") -> list[RemoteEntry]:
        """Return the entries of the directory at *path* (``""`` is the root)."""
        ...

    async def fetch_file_content(self, ref: RepositoryReference, path: str) -> str:
        """Return the decoded text content of a single file."""
        ...
