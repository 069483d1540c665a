from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import Animal


class UnknownReason(str, Enum):
    UNSET = "unset"  # no parent recorded
    MISSING = "missing"  # reference points to no stored animal
    CYCLE = "cycle"  # reference loops back onto the chain being walked


@dataclass(slots=True)
class AncestorNode:
    generation: int
    known: bool
    animal_id: UUID | None = None
    name: str | None = None
    tag_id: str | None = None
    gender: str | None = None
    birth_date: date | None = None
    breed: str | None = None
    status: str | None = None
    is_external: bool = False
    unknown_reason: UnknownReason | None = None
    sire: AncestorNode | None = None
    dam: AncestorNode | None = None

    @classmethod
    def from_animal(cls, animal: Animal, generation: int) -> AncestorNode:
        return cls(
            generation=generation,
            known=True,
            animal_id=animal.id,
            name=animal.name,
            tag_id=animal.tag_id,
            gender=animal.gender.value,
            birth_date=animal.birth_date,
            breed=animal.breed,
            status=animal.status.value,
            is_external=animal.is_external(),
        )

    @classmethod
    def unknown(
        cls, generation: int, reason: UnknownReason, reference_id: UUID | None = None
    ) -> AncestorNode:
        return cls(
            generation=generation, known=False, animal_id=reference_id, unknown_reason=reason
        )


@dataclass(slots=True)
class AncestorTree:
    root: AncestorNode
    depth: int

    def nodes(self) -> list[AncestorNode]:
        found: list[AncestorNode] = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            found.append(node)
            stack.extend(child for child in (node.dam, node.sire) if child is not None)
        return found

    def by_generation(self) -> dict[int, list[AncestorNode]]:
        groups: dict[int, list[AncestorNode]] = {}
        for node in self.nodes():
            groups.setdefault(node.generation, []).append(node)
        return dict(sorted(groups.items()))

    def dangling_references(self) -> list[UUID]:
        return [
            node.animal_id
            for node in self.nodes()
            if node.unknown_reason == UnknownReason.MISSING and node.animal_id is not None
        ]


class PedigreeResolver:
    """Builds ancestor trees by following sire/dam references through the repository."""

    def __init__(self, animals: AnimalRepository) -> None:
        self.animals = animals
        self._cache: dict[UUID, Animal | None] = {}

    async def _fetch(self, animal_id: UUID) -> Animal | None:
        if animal_id not in self._cache:
            self._cache[animal_id] = await self.animals.get(animal_id)
        return self._cache[animal_id]

    async def resolve_ancestors(self, animal: Animal, depth: int) -> AncestorTree:
        self._cache[animal.id] = animal
        root = AncestorNode.from_animal(animal, generation=0)
        await self._expand(root, animal, depth, chain=frozenset({animal.id}))
        return AncestorTree(root=root, depth=depth)

    async def _expand(
        self, node: AncestorNode, animal: Animal, remaining: int, chain: frozenset[UUID]
    ) -> None:
        if remaining <= 0:
            return
        node.sire = await self._parent_node(animal.sire_id, node.generation + 1, remaining, chain)
        node.dam = await self._parent_node(animal.dam_id, node.generation + 1, remaining, chain)

    async def _parent_node(
        self, parent_id: UUID | None, generation: int, remaining: int, chain: frozenset[UUID]
    ) -> AncestorNode:
        if parent_id is None:
            return AncestorNode.unknown(generation, UnknownReason.UNSET)
        if parent_id in chain:
            return AncestorNode.unknown(generation, UnknownReason.CYCLE, parent_id)
        parent = await self._fetch(parent_id)
        if parent is None:
            return AncestorNode.unknown(generation, UnknownReason.MISSING, parent_id)
        node = AncestorNode.from_animal(parent, generation)
        await self._expand(node, parent, remaining - 1, chain | {parent.id})
        return node

    async def ancestor_ids(self, animal: Animal, depth: int) -> set[UUID]:
        """Ids reachable through sire/dam links within `depth` generations."""
        seen: set[UUID] = set()
        frontier = [animal]
        for _ in range(depth):
            next_frontier: list[Animal] = []
            for current in frontier:
                for parent_id in (current.sire_id, current.dam_id):
                    if parent_id is None or parent_id in seen:
                        continue
                    seen.add(parent_id)
                    parent = await self._fetch(parent_id)
                    if parent is not None:
                        next_frontier.append(parent)
            if not next_frontier:
                break
            frontier = next_frontier
        return seen
