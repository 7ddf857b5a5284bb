"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class PlaygroundImporterError(Exception):
    """Base exception for the entire application."""


# ── Request validation ──────────────────────────────────────────────────────


class AuthenticationRequiredError(PlaygroundImporterError):
    """The request carries no user identity."""


class InvalidRepositoryUrlError(PlaygroundImporterError):
    """The supplied URL does not point to a GitHub repository."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryUnavailableError(PlaygroundImporterError):
    """Repository metadata or its root listing could not be fetched."""


class RepositoryNotFoundError(RepositoryUnavailableError):
    """The repository does not exist or is private (404)."""


class GitHubRateLimitError(RepositoryUnavailableError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class ContentFetchError(PlaygroundImporterError):
    """A single file or sub-directory listing could not be fetched."""


class ManifestError(PlaygroundImporterError):
    """The ``package.json`` manifest could not be parsed."""


# ── Storage errors ──────────────────────────────────────────────────────────


class PersistenceError(PlaygroundImporterError):
    """The playground store rejected a write."""


class PlaygroundNotFoundError(PlaygroundImporterError):
    """No playground exists with the requested id."""
