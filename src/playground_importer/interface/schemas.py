"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from playground_importer.domain.entities import PlaygroundView, TemplateKind


class ImportRequest(BaseModel):
    """Request body for ``POST /playgrounds/import``."""

    repo_url: str

    @field_validator("repo_url")
    @classmethod
    def _must_not_be_empty(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "repo_url must not be empty."
            raise ValueError(msg)
        return stripped


class ImportResponse(BaseModel):
    """Successful response from ``POST /playgrounds/import``."""

    success: bool = True
    playground_id: str
    message: str
    skipped_files: int
    template: TemplateKind


class CreatePlaygroundRequest(BaseModel):
    """Request body for ``POST /playgrounds``."""

    title: str
    template: TemplateKind
    description: str | None = None


class EditPlaygroundRequest(BaseModel):
    """Request body for ``PATCH /playgrounds/{id}``."""

    title: str
    description: str | None = None


class StarRequest(BaseModel):
    """Request body for ``PUT /playgrounds/{id}/star``."""

    is_marked: bool


class StarResponse(BaseModel):
    success: bool = True
    is_marked: bool


class PlaygroundResponse(BaseModel):
    """A playground as returned to the dashboard."""

    id: str
    title: str
    description: str | None = None
    template: TemplateKind
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_starred: bool = False

    @classmethod
    def from_view(cls, view: PlaygroundView) -> PlaygroundResponse:
        pg = view.playground
        return cls(
            id=pg.id,
            title=pg.title,
            description=pg.description,
            template=pg.template,
            user_id=pg.user_id,
            created_at=pg.created_at,
            updated_at=pg.updated_at,
            is_starred=view.is_starred,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
