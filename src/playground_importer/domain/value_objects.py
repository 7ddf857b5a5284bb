"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from playground_importer.domain.exceptions import InvalidRepositoryUrlError

_GITHUB_URL_RE = re.compile(
    r"github\.com/(?P<owner>[^/\s?#]+)/(?P<repo>[^/\s?#]+)", re.IGNORECASE
)


@dataclass(frozen=True, slots=True)
class RepositoryReference:
    """Owner / name pair identifying a GitHub repository.

    Accepts anything containing ``github.com/<owner>/<repo>``, so the scheme,
    a ``www.`` prefix and trailing path segments (``/tree/main`` etc.) are all
    tolerated.  A trailing ``.git`` is stripped from the repository name.
    """

    owner: str
    name: str

    @classmethod
    def from_url(cls, url: str) -> RepositoryReference:
        """Parse and validate a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.search(url)
        if not match:
            raise InvalidRepositoryUrlError(
                f"Invalid GitHub URL format: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        name = re.sub(r"\.git$", "", match["repo"])
        if not name:
            raise InvalidRepositoryUrlError(
                f"Invalid GitHub URL format: '{url}'. Repository name is empty."
            )
        return cls(owner=match["owner"], name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
