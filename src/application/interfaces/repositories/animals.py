from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, animal_id: UUID) -> Animal | None: ...

    async def update(
        self,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None:
        """Merge `data` into the stored animal.

        List fields such as `reproduction_records` are replaced wholesale, so
        callers pass the complete new list. Returns None when the animal is
        missing or its version no longer matches `expected_version`.
        """
        ...
