from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.models.health_record import HealthRecord
from src.domain.models.reproduction_record import ReproductionEventType, ReproductionRecord
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.gender import Gender


@dataclass(slots=True)
class Animal:
    id: UUID
    name: str
    tag_id: str
    gender: Gender
    birth_date: date
    breed: str | None = None
    status: AnimalStatus = AnimalStatus.ACTIVE
    photo_url: str | None = None

    # Genealogy fields (weak references, not enforced by storage)
    sire_id: UUID | None = None
    dam_id: UUID | None = None

    # Embedded histories, in insertion order
    reproduction_records: list[ReproductionRecord] = field(default_factory=list)
    health_records: list[HealthRecord] = field(default_factory=list)

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        name: str,
        tag_id: str,
        gender: Gender,
        birth_date: date,
        breed: str | None = None,
        status: AnimalStatus = AnimalStatus.ACTIVE,
        photo_url: str | None = None,
        sire_id: UUID | None = None,
        dam_id: UUID | None = None,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            name=name,
            tag_id=tag_id,
            gender=gender,
            birth_date=birth_date,
            breed=breed,
            status=status,
            photo_url=photo_url,
            sire_id=sire_id,
            dam_id=dam_id,
            created_at=now,
            updated_at=now,
            version=1,
        )

    def is_external(self) -> bool:
        return self.status == AnimalStatus.EXTERNAL

    def has_record_on(self, event_type: ReproductionEventType, on: date) -> bool:
        return any(r.type == event_type and r.date == on for r in self.reproduction_records)

    def last_record_before(
        self, event_type: ReproductionEventType, before: date
    ) -> ReproductionRecord | None:
        """Most recent record of a type dated strictly before `before`.

        Same-date ties go to the record inserted last.
        """
        latest: ReproductionRecord | None = None
        for record in self.reproduction_records:
            if record.type != event_type or record.date >= before:
                continue
            if latest is None or record.date >= latest.date:
                latest = record
        return latest
