from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.application.errors import ConflictError
from src.domain.models.animal import Animal
from src.domain.models.health_record import HealthRecord
from src.domain.models.reproduction_record import (
    ReproductionEventType,
    ReproductionRecord,
    ReproductionRecordDraft,
)
from src.domain.value_objects.gender import Gender
from src.infrastructure.db.base import Base
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


@pytest.fixture()
async def session_factory(test_settings):
    engine = create_engine(test_settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


async def test_update_checks_version_and_keeps_record_order(session_factory):
    animal = Animal.create(
        name="Awa", tag_id="LD-003", gender=Gender.FEMALE, birth_date=date(2021, 2, 1)
    )
    animal.health_records = [HealthRecord.create(date(2023, 1, 5), "Vaccination", "PPR")]
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        await uow.animals.add(animal)
        await uow.commit()

    later = ReproductionRecord.from_draft(
        ReproductionRecordDraft(date=date(2023, 7, 1), type=ReproductionEventType.HEAT)
    )
    earlier = ReproductionRecord.from_draft(
        ReproductionRecordDraft(date=date(2023, 6, 1), type=ReproductionEventType.MATING)
    )
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        updated = await uow.animals.update(
            animal.id, {"reproduction_records": [later, earlier]}, expected_version=1
        )
        stale = await uow.animals.update(
            animal.id, {"reproduction_records": []}, expected_version=1
        )
        await uow.commit()
    assert updated is not None
    assert updated.version == 2
    assert stale is None

    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        stored = await uow.animals.get(animal.id)
    assert [r.id for r in stored.reproduction_records] == [later.id, earlier.id]
    assert stored.health_records[0].type == "Vaccination"
    assert stored.version == 2


async def test_missing_animal_update_returns_none(session_factory):
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        assert await uow.animals.update(uuid4(), {"name": "Ghost"}, expected_version=1) is None
        assert await uow.animals.get(uuid4()) is None


async def test_duplicate_tag_raises_conflict(session_factory):
    first = Animal.create(
        name="Awa", tag_id="LD-003", gender=Gender.FEMALE, birth_date=date(2021, 2, 1)
    )
    second = Animal.create(
        name="Other", tag_id="LD-003", gender=Gender.FEMALE, birth_date=date(2021, 2, 1)
    )
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        await uow.animals.add(first)
        await uow.commit()
    with pytest.raises(ConflictError):
        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            await uow.animals.add(second)
