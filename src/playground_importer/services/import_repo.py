"""Import-repository use case — turns a GitHub URL into a persisted playground.

This is the single entry point for the import logic.  It depends only on the
:class:`RepositoryFetcher` and :class:`PlaygroundStore` ports and the pure
service modules.  The interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging

from playground_importer.domain.entities import (
    DEFAULT_TEMPLATE,
    Identity,
    ImportResult,
    SkipRecord,
    TemplateKind,
    serialize_tree,
)
from playground_importer.domain.exceptions import (
    AuthenticationRequiredError,
    ContentFetchError,
    PersistenceError,
    PlaygroundImporterError,
    RepositoryUnavailableError,
)
from playground_importer.domain.ports.playground_store import PlaygroundStore
from playground_importer.domain.ports.repo_fetcher import RepositoryFetcher
from playground_importer.domain.value_objects import RepositoryReference
from playground_importer.services.template_detector import MANIFEST_PATH, detect_template
from playground_importer.services.tree_builder import RepositoryTreeBuilder

logger = logging.getLogger(__name__)

SKIP_SUMMARY_LIMIT = 5


class ImportRepositoryUseCase:
    """Orchestrates the URL → tree → playground pipeline.

    Parameters
    ----------
    repo_fetcher:
        Adapter that can read metadata, listings and files from GitHub.
    store:
        Adapter that persists playgrounds and their template files.
    tree_builder:
        Walks the repository; built from *repo_fetcher* when omitted.
    """

    def __init__(
        self,
        repo_fetcher: RepositoryFetcher,
        store: PlaygroundStore,
        tree_builder: RepositoryTreeBuilder | None = None,
    ) -> None:
        self._fetcher = repo_fetcher
        self._store = store
        self._tree_builder = tree_builder or RepositoryTreeBuilder(repo_fetcher)

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, repo_url: str, requester: Identity | None) -> ImportResult:
        """Import *repo_url* as a new playground owned by *requester*."""
        if requester is None or not requester.id:
            raise AuthenticationRequiredError("User not authenticated")

        try:
            return await self._import(repo_url, requester)
        except PlaygroundImporterError:
            logger.exception("Error importing GitHub repository %s", repo_url)
            raise
        except Exception as exc:
            logger.exception("Error importing GitHub repository %s", repo_url)
            raise PlaygroundImporterError(str(exc) or "Failed to import repository") from exc

    async def _import(self, repo_url: str, requester: Identity) -> ImportResult:
        ref = RepositoryReference.from_url(repo_url)
        logger.info("Importing %s for user %s", ref.full_name, requester.id)

        # 1. Existence / access check
        metadata = await self._fetcher.fetch_metadata(ref)

        # 2. Template detection (never fatal)
        template = await self._detect_template(ref)

        # 3. Root listing
        try:
            root_entries = await self._fetcher.fetch_listing(ref, "")
        except ContentFetchError as exc:
            raise RepositoryUnavailableError("Failed to fetch repository contents") from exc

        # 4. Tree reconstruction
        tree, skipped = await self._tree_builder.build(ref, root_entries)
        logger.info(
            "Built tree for %s: %d files, %d skipped",
            ref.full_name,
            tree.count_files(),
            len(skipped),
        )

        # 5. Persistence
        try:
            playground = await self._store.create_playground(
                title=metadata.name or ref.name,
                description=metadata.description or f"Imported from {ref.full_name}",
                template=template,
                user_id=requester.id,
            )
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"Failed to save playground: {exc}") from exc

        try:
            await self._store.create_template_file(playground.id, serialize_tree(tree))
        except Exception as exc:
            # A playground without its file tree must not reach the dashboard.
            await self._store.delete_playground(playground.id)
            if isinstance(exc, PersistenceError):
                raise
            raise PersistenceError(f"Failed to save playground: {exc}") from exc

        return ImportResult(
            playground_id=playground.id,
            message=compose_message(ref, skipped),
            template=template,
            tree=tree,
            skipped=skipped,
        )

    async def _detect_template(self, ref: RepositoryReference) -> TemplateKind:
        try:
            manifest = await self._fetcher.fetch_file_content(ref, MANIFEST_PATH)
            return detect_template(manifest)
        except Exception:
            logger.info("Could not detect template type for %s, defaulting to %s",
                        ref.full_name, DEFAULT_TEMPLATE.value, exc_info=True)
            return DEFAULT_TEMPLATE


# ── Helpers ─────────────────────────────────────────────────────────────────


def compose_message(ref: RepositoryReference, skipped: list[SkipRecord]) -> str:
    """Build the user-facing success message, summarising skipped entries."""
    message = f"Successfully imported {ref.full_name}"
    if not skipped:
        return message

    names = ", ".join(record.name for record in skipped[:SKIP_SUMMARY_LIMIT])
    more = len(skipped) - SKIP_SUMMARY_LIMIT
    suffix = f" and {more} more" if more > 0 else ""
    return f"{message} ({len(skipped)} files skipped: {names}{suffix})"
