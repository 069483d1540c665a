from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID, uuid4

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.pedigree import link_parent
from src.domain.models.animal import Animal
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.parent_role import ParentRole

# Placeholder when only the lineage, not the age, of an ancestor is known
APPROXIMATE_BIRTH_DATE = date(2000, 1, 1)


@dataclass(slots=True)
class AddExternalAncestorInput:
    child_id: UUID
    role: ParentRole
    name: str
    tag_id: str | None = None
    birth_date: date | None = None
    breed: str | None = None


@dataclass(slots=True)
class AddExternalAncestorOutput:
    ancestor: Animal
    child: Animal


async def execute(
    uow: UnitOfWork,
    payload: AddExternalAncestorInput,
    *,
    cycle_check_depth: int = link_parent.DEFAULT_CYCLE_CHECK_DEPTH,
) -> AddExternalAncestorOutput:
    child = await uow.animals.get(payload.child_id)
    if not child:
        raise NotFound(f"Animal {payload.child_id} not found")

    ancestor = Animal.create(
        name=payload.name,
        tag_id=payload.tag_id or f"EXT-{uuid4().hex[:8].upper()}",
        gender=payload.role.expected_gender,
        birth_date=payload.birth_date or APPROXIMATE_BIRTH_DATE,
        breed=payload.breed or child.breed,
        status=AnimalStatus.EXTERNAL,
    )
    created = await uow.animals.add(ancestor)
    linked = await link_parent.execute(
        uow,
        link_parent.LinkParentInput(
            child_id=child.id, role=payload.role, parent_id=created.id
        ),
        cycle_check_depth=cycle_check_depth,
    )
    return AddExternalAncestorOutput(ancestor=created, child=linked)
