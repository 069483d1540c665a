from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.pedigree_resolver import AncestorTree, PedigreeResolver

DEFAULT_MAX_DEPTH = 6


async def execute(
    uow: UnitOfWork,
    animal_id: UUID,
    depth: int,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> AncestorTree:
    if depth < 0 or depth > max_depth:
        raise ValidationError(f"depth must be between 0 and {max_depth}")
    animal = await uow.animals.get(animal_id)
    if not animal:
        raise NotFound(f"Animal {animal_id} not found")
    return await PedigreeResolver(uow.animals).resolve_ancestors(animal, depth)
