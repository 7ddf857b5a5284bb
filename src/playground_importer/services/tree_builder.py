"""Recursive reconstruction of a repository as a nested file tree."""

from __future__ import annotations

import logging

from playground_importer.domain.entities import (
    DirectoryNode,
    EntryKind,
    FileNode,
    RemoteEntry,
    SkipRecord,
)
from playground_importer.domain.exceptions import ContentFetchError
from playground_importer.domain.ports.repo_fetcher import RepositoryFetcher
from playground_importer.domain.value_objects import RepositoryReference
from playground_importer.services.entry_filter import (
    MAX_BINARY_SIZE_BYTES,
    MAX_FILE_SIZE_BYTES,
    check_entry,
)

logger = logging.getLogger(__name__)

MAX_DEPTH = 10


class RepositoryTreeBuilder:
    """Walks a repository depth-first through the contents API.

    Entries are fetched one at a time in listing order.  Each call to
    :meth:`build` returns the skip records of its own subtree; parents
    concatenate them, so the final list follows traversal order.

    Parameters
    ----------
    fetcher:
        Adapter that can list directories and fetch file contents.
    max_depth:
        Directories nested deeper than this are returned empty.
    max_file_size:
        Files larger than this (bytes) are skipped.
    max_binary_size:
        Binary / image / archive files larger than this (bytes) are skipped.
    """

    def __init__(
        self,
        fetcher: RepositoryFetcher,
        max_depth: int = MAX_DEPTH,
        max_file_size: int = MAX_FILE_SIZE_BYTES,
        max_binary_size: int = MAX_BINARY_SIZE_BYTES,
    ) -> None:
        self._fetcher = fetcher
        self._max_depth = max_depth
        self._max_file_size = max_file_size
        self._max_binary_size = max_binary_size

    async def build(
        self,
        ref: RepositoryReference,
        entries: list[RemoteEntry],
        base_path: str = "",
        depth: int = 0,
    ) -> tuple[DirectoryNode, list[SkipRecord]]:
        """Return the directory node for *entries* and the records skipped below it."""
        directory = DirectoryNode()
        skipped: list[SkipRecord] = []

        if depth > self._max_depth:
            logger.debug("Depth limit reached at '%s' — truncating", base_path)
            return directory, skipped

        for entry in entries:
            record = check_entry(entry, self._max_file_size, self._max_binary_size)
            if record is not None:
                logger.debug("Skipping %s: %s", record.name, record.reason)
                skipped.append(record)
                continue

            item_path = f"{base_path}/{entry.name}" if base_path else entry.name

            if entry.kind is EntryKind.FILE:
                node, failure = await self._fetch_file(ref, entry)
                directory.entries[entry.name] = node
                if failure is not None:
                    skipped.append(failure)
                continue

            try:
                sub_entries = await self._fetcher.fetch_listing(ref, entry.path or item_path)
            except ContentFetchError:
                logger.debug("Failed to list %s — omitting subtree", item_path, exc_info=True)
                skipped.append(SkipRecord(entry.path or entry.name, "Failed to fetch directory listing"))
                continue

            subtree, sub_skipped = await self.build(ref, sub_entries, item_path, depth + 1)
            directory.entries[entry.name] = subtree
            skipped.extend(sub_skipped)

        return directory, skipped

    async def _fetch_file(
        self, ref: RepositoryReference, entry: RemoteEntry
    ) -> tuple[FileNode, SkipRecord | None]:
        """Fetch one file; the node is returned even when the fetch fails."""
        try:
            content = await self._fetcher.fetch_file_content(ref, entry.path or entry.name)
        except ContentFetchError:
            logger.debug("Failed to fetch %s", entry.path, exc_info=True)
            content = ""

        failure = None
        if content == "" and entry.size > 0:
            failure = SkipRecord(entry.path or entry.name, "Failed to fetch content")
        return FileNode(contents=content), failure
