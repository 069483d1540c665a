from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.services.pedigree_resolver import UnknownReason
from src.interfaces.http.schemas.animals import AnimalResponse


class LinkParentRequest(BaseModel):
    parent_id: UUID


class ExternalAncestorCreate(BaseModel):
    """An ancestor known only by name, kept out of the herd inventory."""

    name: str = Field(..., min_length=1, max_length=255)
    tag_id: str | None = Field(None, max_length=128)  # generated when omitted
    birth_date: date | None = None  # approximate
    breed: str | None = None  # defaults to the child's breed


class ExternalAncestorResponse(BaseModel):
    ancestor: AnimalResponse
    child: AnimalResponse


class AncestorNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    sire: AncestorNodeResponse | None = None
    dam: AncestorNodeResponse | None = None


class PedigreeResponse(BaseModel):
    depth: int
    root: AncestorNodeResponse
    dangling_references: list[UUID] = []
