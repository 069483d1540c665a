from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.use_cases.pedigree import (
    add_external_ancestor,
    link_parent,
    resolve_ancestors,
)
from src.config.settings import Settings
from src.domain.value_objects.parent_role import ParentRole
from src.interfaces.http.deps import get_app_settings, get_uow
from src.interfaces.http.schemas.animals import AnimalResponse
from src.interfaces.http.schemas.pedigree import (
    AncestorNodeResponse,
    ExternalAncestorCreate,
    ExternalAncestorResponse,
    LinkParentRequest,
    PedigreeResponse,
)

router = APIRouter(prefix="/animals/{animal_id}", tags=["pedigree"])


@router.put("/parents/{role}", response_model=AnimalResponse)
async def link_parent_endpoint(
    animal_id: UUID,
    role: ParentRole,
    payload: LinkParentRequest,
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> AnimalResponse:
    child = await link_parent.execute(
        uow,
        link_parent.LinkParentInput(child_id=animal_id, role=role, parent_id=payload.parent_id),
        cycle_check_depth=settings.pedigree_cycle_check_depth,
    )
    return AnimalResponse.model_validate(child)


@router.post(
    "/parents/{role}/external",
    status_code=status.HTTP_201_CREATED,
    response_model=ExternalAncestorResponse,
)
async def add_external_ancestor_endpoint(
    animal_id: UUID,
    role: ParentRole,
    payload: ExternalAncestorCreate,
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> ExternalAncestorResponse:
    """Create an External animal and link it as the child's sire or dam."""
    result = await add_external_ancestor.execute(
        uow,
        add_external_ancestor.AddExternalAncestorInput(
            child_id=animal_id, role=role, **payload.model_dump()
        ),
        cycle_check_depth=settings.pedigree_cycle_check_depth,
    )
    return ExternalAncestorResponse(
        ancestor=AnimalResponse.model_validate(result.ancestor),
        child=AnimalResponse.model_validate(result.child),
    )


@router.get("/pedigree", response_model=PedigreeResponse)
async def get_pedigree(
    animal_id: UUID,
    depth: int = Query(3, ge=0, description="Generations to walk"),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> PedigreeResponse:
    tree = await resolve_ancestors.execute(
        uow, animal_id, depth, max_depth=settings.pedigree_max_depth
    )
    return PedigreeResponse(
        depth=tree.depth,
        root=AncestorNodeResponse.model_validate(tree.root),
        dangling_references=tree.dangling_references(),
    )
