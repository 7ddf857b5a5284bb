"""Port: playground store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from playground_importer.domain.entities import Playground, TemplateFile, TemplateKind


class PlaygroundStore(Protocol):
    """Abstract contract for persisting playgrounds and their file trees."""

    async def create_playground(
        self,
        *,
        title: str,
        template: TemplateKind,
        user_id: str,
        description: str | None = None,
    ) -> Playground:
        ...

    async def get_playground(self, playground_id: str) -> Playground | None:
        ...

    async def list_playgrounds(self, user_id: str) -> list[Playground]:
        ...

    async def update_playground(
        self, playground_id: str, *, title: str, description: str | None
    ) -> Playground:
        ...

    async def delete_playground(self, playground_id: str) -> None:
        ...

    async def create_template_file(
        self, playground_id: str, content: dict[str, Any]
    ) -> TemplateFile:
        ...

    async def get_template_file(self, playground_id: str) -> TemplateFile | None:
        ...

    async def set_star(self, user_id: str, playground_id: str) -> None:
        ...

    async def clear_star(self, user_id: str, playground_id: str) -> None:
        ...

    async def is_starred(self, user_id: str, playground_id: str) -> bool:
        ...
