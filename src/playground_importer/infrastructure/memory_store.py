"""In-memory adapter for the PlaygroundStore port."""

from __future__ import annotations

import asyncio
import copy
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from playground_importer.domain.entities import Playground, TemplateFile, TemplateKind
from playground_importer.domain.exceptions import PlaygroundNotFoundError


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryPlaygroundStore:
    """Process-local playground store.  Contents are lost on restart."""

    def __init__(self) -> None:
        self._playgrounds: dict[str, Playground] = {}
        self._template_files: dict[str, TemplateFile] = {}
        self._stars: set[tuple[str, str]] = set()
        self._lock = asyncio.Lock()

    async def create_playground(
        self,
        *,
        title: str,
        template: TemplateKind,
        user_id: str,
        description: str | None = None,
    ) -> Playground:
        now = _now()
        playground = Playground(
            id=uuid.uuid4().hex,
            title=title,
            template=template,
            user_id=user_id,
            description=description,
            created_at=now,
            updated_at=now,
        )
        async with self._lock:
            self._playgrounds[playground.id] = playground
        return replace(playground)

    async def get_playground(self, playground_id: str) -> Playground | None:
        playground = self._playgrounds.get(playground_id)
        return replace(playground) if playground else None

    async def list_playgrounds(self, user_id: str) -> list[Playground]:
        owned = [pg for pg in self._playgrounds.values() if pg.user_id == user_id]
        owned.sort(key=lambda pg: pg.created_at or _now())
        return [replace(pg) for pg in owned]

    async def update_playground(
        self, playground_id: str, *, title: str, description: str | None
    ) -> Playground:
        async with self._lock:
            current = self._playgrounds.get(playground_id)
            if current is None:
                raise PlaygroundNotFoundError(f"Playground '{playground_id}' not found.")
            updated = replace(current, title=title, description=description, updated_at=_now())
            self._playgrounds[playground_id] = updated
        return replace(updated)

    async def delete_playground(self, playground_id: str) -> None:
        async with self._lock:
            self._playgrounds.pop(playground_id, None)
            self._template_files.pop(playground_id, None)
            self._stars = {star for star in self._stars if star[1] != playground_id}

    async def create_template_file(
        self, playground_id: str, content: dict[str, Any]
    ) -> TemplateFile:
        async with self._lock:
            if playground_id not in self._playgrounds:
                raise PlaygroundNotFoundError(f"Playground '{playground_id}' not found.")
            template_file = TemplateFile(playground_id=playground_id, content=copy.deepcopy(content))
            self._template_files[playground_id] = template_file
        return template_file

    async def get_template_file(self, playground_id: str) -> TemplateFile | None:
        return self._template_files.get(playground_id)

    async def set_star(self, user_id: str, playground_id: str) -> None:
        async with self._lock:
            self._stars.add((user_id, playground_id))

    async def clear_star(self, user_id: str, playground_id: str) -> None:
        async with self._lock:
            self._stars.discard((user_id, playground_id))

    async def is_starred(self, user_id: str, playground_id: str) -> bool:
        return (user_id, playground_id) in self._stars
