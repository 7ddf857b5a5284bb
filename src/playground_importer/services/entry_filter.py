"""Entry filtering — decide which repository entries make it into a playground."""

from __future__ import annotations

from playground_importer.domain.entities import EntryKind, RemoteEntry, SkipRecord

SYSTEM_NAMES: frozenset[str] = frozenset(
    {
        ".git",
        "node_modules",
        ".DS_Store",
    }
)

# Example files such as .env.example are not listed here and get imported.
LOCK_OR_CONFIG_NAMES: frozenset[str] = frozenset(
    {
        ".github",
        ".gitignore",
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
    }
)

BINARY_EXTENSIONS: tuple[str, ...] = (
    ".png", ".jpg", ".jpeg", ".gif", ".ico",
    ".pdf", ".zip", ".tar", ".gz",
)

MAX_FILE_SIZE_BYTES = 5_000_000
MAX_BINARY_SIZE_BYTES = 500_000


def _is_binary(name: str) -> bool:
    lower = name.lower()
    return any(lower.endswith(ext) for ext in BINARY_EXTENSIONS)


def check_entry(
    entry: RemoteEntry,
    max_file_size: int = MAX_FILE_SIZE_BYTES,
    max_binary_size: int = MAX_BINARY_SIZE_BYTES,
) -> SkipRecord | None:
    """Return a :class:`SkipRecord` if *entry* must be excluded, else ``None``.

    Rules are evaluated in order and the first match wins: system entries,
    lock files and CI config, oversized files, oversized binaries.
    """
    label = entry.path or entry.name

    if entry.name in SYSTEM_NAMES:
        return SkipRecord(label, f"System file/folder ({entry.name})")

    if entry.name in LOCK_OR_CONFIG_NAMES:
        return SkipRecord(label, f"Lock file or config ({entry.name})")

    if entry.kind is EntryKind.OTHER:
        return SkipRecord(label, f"Unsupported entry type ({entry.raw_type or 'unknown'})")

    if entry.kind is EntryKind.DIR:
        return None

    if entry.size > max_file_size:
        return SkipRecord(label, f"File too large ({entry.size / 1_000_000:.2f}MB)")

    if _is_binary(entry.name) and entry.size > max_binary_size:
        return SkipRecord(label, f"Binary file too large ({entry.size / 1_000:.2f}KB)")

    return None
