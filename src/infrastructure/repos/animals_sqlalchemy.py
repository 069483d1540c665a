from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, RepositoryFailure
from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import Animal
from src.domain.models.health_record import HealthRecord
from src.domain.models.reproduction_record import ReproductionRecord
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.gender import Gender
from src.infrastructure.db.orm.animal import AnimalORM

_RECORD_FIELDS = ("reproduction_records", "health_records")


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            name=orm.name,
            tag_id=orm.tag_id,
            gender=Gender(orm.gender),
            birth_date=orm.birth_date,
            breed=orm.breed,
            status=AnimalStatus(orm.status),
            photo_url=orm.photo_url,
            sire_id=orm.sire_id,
            dam_id=orm.dam_id,
            reproduction_records=[
                ReproductionRecord.from_dict(item) for item in orm.reproduction_records or []
            ],
            health_records=[HealthRecord.from_dict(item) for item in orm.health_records or []],
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    def _to_columns(self, data: dict) -> dict:
        values = {}
        for key, value in data.items():
            if key in _RECORD_FIELDS:
                value = [item.to_dict() for item in value]
            elif isinstance(value, Enum):
                value = value.value
            values[key] = value
        return values

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            name=animal.name,
            tag_id=animal.tag_id,
            gender=animal.gender.value,
            birth_date=animal.birth_date,
            breed=animal.breed,
            status=animal.status.value,
            photo_url=animal.photo_url,
            sire_id=animal.sire_id,
            dam_id=animal.dam_id,
            reproduction_records=[r.to_dict() for r in animal.reproduction_records],
            health_records=[h.to_dict() for h in animal.health_records],
            created_at=animal.created_at,
            updated_at=animal.updated_at,
            version=animal.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Animal tag {animal.tag_id} already exists") from exc
        except SQLAlchemyError as exc:
            raise RepositoryFailure("Failed to store animal") from exc
        return self._to_domain(orm)

    async def get(self, animal_id: UUID) -> Animal | None:
        stmt = select(AnimalORM).where(AnimalORM.id == animal_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RepositoryFailure(f"Failed to load animal {animal_id}") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(
        self,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None:
        values = {
            **self._to_columns(data),
            "version": expected_version + 1,
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.version == expected_version)
            .values(**values)
            .returning(AnimalORM)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update animal due to constraint violation") from exc
        except SQLAlchemyError as exc:
            raise RepositoryFailure(f"Failed to update animal {animal_id}") from exc
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return self._to_domain(orm)
