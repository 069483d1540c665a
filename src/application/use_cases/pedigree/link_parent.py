from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.pedigree_resolver import PedigreeResolver
from src.domain.models.animal import Animal
from src.domain.value_objects.parent_role import ParentRole

logger = logging.getLogger(__name__)

DEFAULT_CYCLE_CHECK_DEPTH = 12


@dataclass(slots=True)
class LinkParentInput:
    child_id: UUID
    role: ParentRole
    parent_id: UUID


async def execute(
    uow: UnitOfWork,
    payload: LinkParentInput,
    *,
    cycle_check_depth: int = DEFAULT_CYCLE_CHECK_DEPTH,
) -> Animal:
    """Point the child's sire or dam reference at an existing animal."""
    if payload.parent_id == payload.child_id:
        raise ValidationError("An animal cannot be its own parent")

    child = await uow.animals.get(payload.child_id)
    if not child:
        raise NotFound(f"Animal {payload.child_id} not found")
    parent = await uow.animals.get(payload.parent_id)
    if not parent:
        raise NotFound(f"Parent {payload.parent_id} not found")

    expected = payload.role.expected_gender
    if parent.gender != expected:
        raise ValidationError(
            f"{payload.role.value.capitalize()} {parent.name} ({parent.tag_id}) must be "
            f"{expected.value.lower()}",
            details={"role": payload.role.value, "gender": parent.gender.value},
        )

    ancestors = await PedigreeResolver(uow.animals).ancestor_ids(parent, cycle_check_depth)
    if child.id in ancestors:
        raise ValidationError(
            f"Linking {parent.tag_id} as {payload.role.value} of {child.tag_id} "
            "would make the animal its own ancestor",
            details={"child_id": str(child.id), "parent_id": str(parent.id)},
        )

    updated = await uow.animals.update(
        child.id,
        data={payload.role.field_name: parent.id},
        expected_version=child.version,
    )
    if not updated:
        raise ConflictError("Version mismatch while linking parent")
    await uow.commit()
    logger.info("Linked %s %s to animal %s", payload.role.value, parent.id, child.id)
    return updated
