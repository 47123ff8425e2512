"""Pydantic schemas for KPI results.

Pure data classes — no business logic. Returned by ``officine.kpi``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class InspectionStats(BaseModel):
    """Completion and compliance figures for one inspection."""

    total_criteria: int
    answered: int
    pending: int
    conforme: int
    non_conforme: int
    completion_rate: int
    compliance_rate: int


class AggregateStats(BaseModel):
    """Totals across a set of inspections."""

    total_inspections: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    total_criteria: int = 0
    total_conforme: int = 0
    total_non_conforme: int = 0
    average_compliance_rate: int = 0


class TrendPoint(BaseModel):
    """Average compliance for all inspections sharing one date."""

    date: str
    compliance_rate: int
    total_inspections: int
