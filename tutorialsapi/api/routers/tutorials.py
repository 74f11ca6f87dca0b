"""Tutorials router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tutorialsapi.api.deps import get_session, get_tutorial_service
from tutorialsapi.api.errors import unwrap
from tutorialsapi.api.schemas.tutorial import (
    CreateTutorialRequest,
    DeletedResponse,
    TutorialResponse,
    UpdateTutorialRequest,
)
from tutorialsapi.services.tutorial_service import (
    CreateTutorialInput,
    TutorialChanges,
    TutorialService,
)

router = APIRouter()


@router.get("", response_model=list[TutorialResponse])
async def list_tutorials(
    title: str | None = Query(None, description="case-insensitive title substring"),
    session: AsyncSession = Depends(get_session),
    svc: TutorialService = Depends(get_tutorial_service),
) -> list[TutorialResponse]:
    tutorials = unwrap(await svc.handle_list(session, title=title))
    return [TutorialResponse.model_validate(t) for t in tutorials]


@router.get("/published", response_model=list[TutorialResponse])
async def list_published_tutorials(
    session: AsyncSession = Depends(get_session),
    svc: TutorialService = Depends(get_tutorial_service),
) -> list[TutorialResponse]:
    tutorials = unwrap(await svc.handle_list_published(session))
    return [TutorialResponse.model_validate(t) for t in tutorials]


@router.get("/{tutorial_id}", response_model=TutorialResponse)
async def get_tutorial(
    tutorial_id: str,
    session: AsyncSession = Depends(get_session),
    svc: TutorialService = Depends(get_tutorial_service),
) -> TutorialResponse:
    return TutorialResponse.model_validate(unwrap(await svc.handle_get(session, tutorial_id)))


@router.post("", response_model=TutorialResponse)
async def create_tutorial(
    body: CreateTutorialRequest,
    session: AsyncSession = Depends(get_session),
    svc: TutorialService = Depends(get_tutorial_service),
) -> TutorialResponse:
    outcome = await svc.handle_create(
        session,
        CreateTutorialInput(
            title=body.title,
            description=body.description,
            published=body.published,
        ),
    )
    return TutorialResponse.model_validate(unwrap(outcome))


@router.put("/{tutorial_id}", response_model=TutorialResponse)
async def update_tutorial(
    tutorial_id: str,
    body: UpdateTutorialRequest,
    session: AsyncSession = Depends(get_session),
    svc: TutorialService = Depends(get_tutorial_service),
) -> TutorialResponse:
    changes = TutorialChanges(**body.model_dump(exclude_unset=True))
    outcome = await svc.handle_update(session, tutorial_id, changes)
    return TutorialResponse.model_validate(unwrap(outcome))


@router.delete("/{tutorial_id}", response_model=DeletedResponse)
async def delete_tutorial(
    tutorial_id: str,
    session: AsyncSession = Depends(get_session),
    svc: TutorialService = Depends(get_tutorial_service),
) -> DeletedResponse:
    return DeletedResponse(deleted=unwrap(await svc.handle_delete(session, tutorial_id)))


@router.delete("", response_model=DeletedResponse)
async def delete_all_tutorials(
    session: AsyncSession = Depends(get_session),
    svc: TutorialService = Depends(get_tutorial_service),
) -> DeletedResponse:
    return DeletedResponse(deleted=unwrap(await svc.handle_delete_all(session)))
