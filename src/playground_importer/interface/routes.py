"""API routes — thin controllers that delegate to the services."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from playground_importer.domain.entities import Identity, PlaygroundView
from playground_importer.interface.dependencies import (
    get_current_user,
    get_import_use_case,
    get_playground_service,
)
from playground_importer.interface.schemas import (
    CreatePlaygroundRequest,
    EditPlaygroundRequest,
    ErrorResponse,
    ImportRequest,
    ImportResponse,
    PlaygroundResponse,
    StarRequest,
    StarResponse,
)
from playground_importer.services.import_repo import ImportRepositoryUseCase
from playground_importer.services.playgrounds import PlaygroundService

router = APIRouter(prefix="/playgrounds")

_UNAUTHENTICATED = {401: {"model": ErrorResponse, "description": "No user identity on the request"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Playground not found"}}


@router.post(
    "/import",
    response_model=ImportResponse,
    status_code=201,
    responses={
        **_UNAUTHENTICATED,
        404: {"model": ErrorResponse, "description": "Repository not found or is private"},
        422: {"model": ErrorResponse, "description": "Invalid GitHub URL"},
        429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "Repository could not be fetched"},
    },
)
async def import_repository(
    body: ImportRequest,
    user: Identity | None = Depends(get_current_user),
    use_case: ImportRepositoryUseCase = Depends(get_import_use_case),
) -> ImportResponse:
    """Import a GitHub repository as a new playground."""
    result = await use_case.execute(body.repo_url, user)
    return ImportResponse(
        success=result.success,
        playground_id=result.playground_id,
        message=result.message,
        skipped_files=result.skipped_files,
        template=result.template,
    )


@router.get("", response_model=list[PlaygroundResponse], responses=_UNAUTHENTICATED)
async def list_playgrounds(
    user: Identity | None = Depends(get_current_user),
    service: PlaygroundService = Depends(get_playground_service),
) -> list[PlaygroundResponse]:
    """List the requester's playgrounds with their star marks."""
    views = await service.list_for_user(user)
    return [PlaygroundResponse.from_view(view) for view in views]


@router.post(
    "", response_model=PlaygroundResponse, status_code=201, responses=_UNAUTHENTICATED
)
async def create_playground(
    body: CreatePlaygroundRequest,
    user: Identity | None = Depends(get_current_user),
    service: PlaygroundService = Depends(get_playground_service),
) -> PlaygroundResponse:
    playground = await service.create(
        user, title=body.title, template=body.template, description=body.description
    )
    return PlaygroundResponse.from_view(PlaygroundView(playground))


@router.patch("/{playground_id}", response_model=PlaygroundResponse, responses=_NOT_FOUND)
async def edit_playground(
    playground_id: str,
    body: EditPlaygroundRequest,
    service: PlaygroundService = Depends(get_playground_service),
) -> PlaygroundResponse:
    playground = await service.edit(
        playground_id, title=body.title, description=body.description
    )
    return PlaygroundResponse.from_view(PlaygroundView(playground))


@router.delete("/{playground_id}", status_code=204, responses=_NOT_FOUND)
async def delete_playground(
    playground_id: str,
    service: PlaygroundService = Depends(get_playground_service),
) -> Response:
    await service.delete(playground_id)
    return Response(status_code=204)


@router.post(
    "/{playground_id}/duplicate",
    response_model=PlaygroundResponse,
    status_code=201,
    responses=_NOT_FOUND,
)
async def duplicate_playground(
    playground_id: str,
    service: PlaygroundService = Depends(get_playground_service),
) -> PlaygroundResponse:
    playground = await service.duplicate(playground_id)
    return PlaygroundResponse.from_view(PlaygroundView(playground))


@router.put(
    "/{playground_id}/star",
    response_model=StarResponse,
    responses={**_UNAUTHENTICATED, **_NOT_FOUND},
)
async def star_playground(
    playground_id: str,
    body: StarRequest,
    user: Identity | None = Depends(get_current_user),
    service: PlaygroundService = Depends(get_playground_service),
) -> StarResponse:
    """Star or unstar a playground for the requester."""
    is_marked = await service.toggle_star(user, playground_id, body.is_marked)
    return StarResponse(is_marked=is_marked)
