"""Dashboard operations on playgrounds."""

from __future__ import annotations

import logging

from playground_importer.domain.entities import (
    Identity,
    Playground,
    PlaygroundView,
    TemplateKind,
)
from playground_importer.domain.exceptions import (
    AuthenticationRequiredError,
    PlaygroundNotFoundError,
)
from playground_importer.domain.ports.playground_store import PlaygroundStore

logger = logging.getLogger(__name__)


def _require_user(requester: Identity | None) -> Identity:
    if requester is None or not requester.id:
        raise AuthenticationRequiredError("User not authenticated")
    return requester


class PlaygroundService:
    """CRUD and star marks for the playgrounds shown on a user's dashboard."""

    def __init__(self, store: PlaygroundStore) -> None:
        self._store = store

    async def list_for_user(self, requester: Identity | None) -> list[PlaygroundView]:
        user = _require_user(requester)
        playgrounds = await self._store.list_playgrounds(user.id)
        return [
            PlaygroundView(
                playground=pg,
                is_starred=await self._store.is_starred(user.id, pg.id),
            )
            for pg in playgrounds
        ]

    async def create(
        self,
        requester: Identity | None,
        *,
        title: str,
        template: TemplateKind,
        description: str | None = None,
    ) -> Playground:
        user = _require_user(requester)
        playground = await self._store.create_playground(
            title=title,
            template=template,
            user_id=user.id,
            description=description,
        )
        logger.info("Created playground %s (%s)", playground.id, template.value)
        return playground

    async def edit(
        self, playground_id: str, *, title: str, description: str | None
    ) -> Playground:
        await self._get(playground_id)
        return await self._store.update_playground(
            playground_id, title=title, description=description
        )

    async def delete(self, playground_id: str) -> None:
        await self._get(playground_id)
        await self._store.delete_playground(playground_id)
        logger.info("Deleted playground %s", playground_id)

    async def duplicate(self, playground_id: str) -> Playground:
        """Copy a playground, including its template file when it has one."""
        original = await self._get(playground_id)
        copy = await self._store.create_playground(
            title=f"{original.title} (Copy)",
            template=original.template,
            user_id=original.user_id,
            description=original.description,
        )
        template_file = await self._store.get_template_file(playground_id)
        if template_file is not None:
            await self._store.create_template_file(copy.id, template_file.content)
        logger.info("Duplicated playground %s as %s", playground_id, copy.id)
        return copy

    async def toggle_star(
        self, requester: Identity | None, playground_id: str, is_marked: bool
    ) -> bool:
        """Star or unstar a playground for the requester; returns the new state."""
        user = _require_user(requester)
        await self._get(playground_id)
        if is_marked:
            await self._store.set_star(user.id, playground_id)
        else:
            await self._store.clear_star(user.id, playground_id)
        return is_marked

    async def _get(self, playground_id: str) -> Playground:
        playground = await self._store.get_playground(playground_id)
        if playground is None:
            raise PlaygroundNotFoundError(f"Playground '{playground_id}' not found.")
        return playground
