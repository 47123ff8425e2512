"""Inspection, progress and response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from officine.models.enums import InspectionStatus


class Progress(BaseModel):
    """Derived counters recomputed from the responses on every save."""

    total: int = 0
    answered: int = 0
    conforme: int = 0
    non_conforme: int = 0


class Inspection(BaseModel):
    """Stored inspection record."""

    model_config = ConfigDict(use_enum_values=True)

    id: str
    grid_id: str
    status: InspectionStatus = InspectionStatus.DRAFT
    date_inspection: str
    establishment: str
    inspection_type: str
    inspectors: list[str] = Field(default_factory=list)
    created_by: str | None = None
    created_by_name: str | None = None
    validated_by: str | None = None
    validated_by_name: str | None = None
    validated_at: str | None = None
    created_at: str
    updated_at: str
    progress: Progress = Field(default_factory=Progress)


class Response(BaseModel):
    """Answer to one criterion of one inspection.

    ``conforme`` is tri-state: True (compliant), False (non-compliant),
    None (not answered yet).
    """

    criterion_id: int
    conforme: bool | None = None
    observation: str = ""
    updated_by: str | None = None
    updated_at: str


class CreateInspectionRequest(BaseModel):
    """Fields supplied when creating an inspection or replacing its metadata."""

    grid_id: str
    date_inspection: str
    establishment: str
    inspection_type: str
    inspectors: list[str] = Field(default_factory=list)


class InspectionFilter(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    mine_only: bool = False
    status: InspectionStatus | None = None
