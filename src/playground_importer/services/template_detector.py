"""Template detection — infer the playground framework from ``package.json``."""

from __future__ import annotations

import json
from typing import Any

from playground_importer.domain.entities import DEFAULT_TEMPLATE, TemplateKind
from playground_importer.domain.exceptions import ManifestError

MANIFEST_PATH = "package.json"

# Order matters: a Next.js project also depends on react.
_FRAMEWORK_MARKERS: list[tuple[str, TemplateKind]] = [
    ("next", TemplateKind.NEXTJS),
    ("@angular/core", TemplateKind.ANGULAR),
    ("vue", TemplateKind.VUE),
    ("hono", TemplateKind.HONO),
    ("express", TemplateKind.EXPRESS),
    ("react", TemplateKind.REACT),
]


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def detect_template(manifest_text: str) -> TemplateKind:
    """Return the :class:`TemplateKind` declared by a ``package.json`` body.

    An empty manifest yields the default.  Raises :class:`ManifestError`
    when the text is not a JSON object.
    """
    if not manifest_text.strip():
        return DEFAULT_TEMPLATE

    try:
        manifest = json.loads(manifest_text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"package.json is not valid JSON: {exc}") from exc

    if not isinstance(manifest, dict):
        raise ManifestError("package.json does not contain a JSON object.")

    dependencies = {
        **_mapping(manifest.get("dependencies")),
        **_mapping(manifest.get("devDependencies")),
    }

    for marker, kind in _FRAMEWORK_MARKERS:
        if dependencies.get(marker):
            return kind

    return DEFAULT_TEMPLATE
