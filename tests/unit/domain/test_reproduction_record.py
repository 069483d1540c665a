from __future__ import annotations

from datetime import date
from uuid import uuid4

from src.domain.models.reproduction_record import (
    HeatIntensity,
    ReproductionEventType,
    ReproductionRecord,
    UltrasoundResult,
)
from tests.unit.factories import draft, make_animal, record


def test_from_draft_keeps_only_fields_of_its_type():
    rec = ReproductionRecord.from_draft(
        draft(
            ReproductionEventType.HEAT,
            date(2023, 5, 1),
            heat_intensity=HeatIntensity.HIGH,
            heat_duration_hours=24,
            offspring_count=2,
            ultrasound_result=UltrasoundResult.POSITIVE,
            notes="  ",
        )
    )
    assert rec.heat_intensity == HeatIntensity.HIGH
    assert rec.heat_duration_hours == 24
    assert rec.offspring_count is None
    assert rec.ultrasound_result is None
    assert rec.notes is None


def test_birth_defaults_to_single_offspring():
    rec = record(ReproductionEventType.BIRTH, date(2023, 10, 20))
    assert rec.offspring_count == 1


def test_mirrored_mating_points_back_at_subject():
    subject_id, partner_id = uuid4(), uuid4()
    rec = record(ReproductionEventType.MATING, date(2023, 6, 1), mate_id=partner_id, notes="pen 2")
    mirror = rec.mirrored_for(subject_id)
    assert mirror.id != rec.id
    assert mirror.type == ReproductionEventType.MATING
    assert mirror.date == rec.date
    assert mirror.mate_id == subject_id
    assert mirror.notes == "pen 2"


def test_dict_form_omits_unset_fields():
    rec = record(
        ReproductionEventType.ULTRASOUND, date(2023, 7, 1), ultrasound_result=UltrasoundResult.NEGATIVE
    )
    data = rec.to_dict()
    assert data["ultrasound_result"] == "Negative"
    assert "mate_id" not in data
    assert ReproductionRecord.from_dict(data) == rec


def test_last_record_before_prefers_latest_insert_on_same_date():
    animal = make_animal()
    first = record(ReproductionEventType.MATING, date(2023, 6, 1))
    second = record(ReproductionEventType.MATING, date(2023, 6, 1))
    animal.reproduction_records = [first, second]
    assert animal.last_record_before(ReproductionEventType.MATING, date(2023, 11, 1)) is second
    assert animal.last_record_before(ReproductionEventType.MATING, date(2023, 6, 1)) is None
