"""KPI calculations — completion and compliance figures.

Pure Python, no store access, never raises. Accepts the pydantic records
returned by the dispatcher or plain mappings with the same keys (as read
back from a JSON export).

Rates are integer percentages rounded half away from zero:
  compliance = conforme / answered × 100
  completion = answered / total × 100
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from officine.schemas.inspections import Progress
from officine.schemas.kpi import AggregateStats, InspectionStats, TrendPoint


def read_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an attribute holder."""
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def percent(part: int, whole: int) -> int:
    """part / whole × 100 rounded half-up; 0 when whole is 0."""
    if not whole:
        return 0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _progress_of(inspection: Any) -> Progress:
    raw = read_field(inspection, "progress")
    if raw is None:
        return Progress()
    if isinstance(raw, Progress):
        return raw
    return Progress.model_validate(raw)


def progress_from_responses(responses: Iterable[Any]) -> Progress:
    """Recount the progress snapshot from every response of an inspection."""
    values = [read_field(r, "conforme") for r in responses]
    return Progress(
        total=len(values),
        answered=sum(1 for v in values if v is not None),
        conforme=sum(1 for v in values if v is True),
        non_conforme=sum(1 for v in values if v is False),
    )


def compliance_rate(responses: Mapping[Any, Any] | Iterable[Any] | None) -> int:
    """Share of answered responses marked conforme, as an integer percentage.

    Accepts a mapping of criterion id → response or any iterable of
    responses. Returns 0 when nothing has been answered.
    """
    if not responses:
        return 0
    items = responses.values() if isinstance(responses, Mapping) else responses
    progress = progress_from_responses(items)
    return percent(progress.conforme, progress.answered)


def inspection_stats(inspection: Any) -> InspectionStats | None:
    """Completion and compliance of one inspection, from its progress snapshot."""
    if inspection is None:
        return None

    p = _progress_of(inspection)
    return InspectionStats(
        total_criteria=p.total,
        answered=p.answered,
        pending=p.total - p.answered,
        conforme=p.conforme,
        non_conforme=p.non_conforme,
        completion_rate=percent(p.answered, p.total),
        compliance_rate=percent(p.conforme, p.answered),
    )


def aggregate(inspections: Iterable[Any] | None) -> AggregateStats:
    """Totals across inspections.

    ``average_compliance_rate`` is the unweighted mean of each inspection's
    own compliance rate, not the global conforme / answered ratio.
    """
    items = list(inspections or [])
    if not items:
        return AggregateStats()

    by_status: dict[str, int] = {}
    total_criteria = 0
    total_conforme = 0
    total_non_conforme = 0
    rates: list[int] = []

    for insp in items:
        status = read_field(insp, "status", "")
        status = getattr(status, "value", status)
        by_status[status] = by_status.get(status, 0) + 1

        stats = inspection_stats(insp)
        if stats is None:
            continue
        total_criteria += stats.total_criteria
        total_conforme += stats.conforme
        total_non_conforme += stats.non_conforme
        rates.append(stats.compliance_rate)

    return AggregateStats(
        total_inspections=len(items),
        by_status=by_status,
        total_criteria=total_criteria,
        total_conforme=total_conforme,
        total_non_conforme=total_non_conforme,
        average_compliance_rate=percent(sum(rates), len(rates) * 100) if rates else 0,
    )


def trend(inspections: Iterable[Any] | None) -> list[TrendPoint]:
    """One point per inspection date (creation time when undated), oldest first."""
    by_date: dict[str, list[Any]] = {}
    for insp in inspections or []:
        key = read_field(insp, "date_inspection") or read_field(insp, "created_at") or ""
        by_date.setdefault(key, []).append(insp)

    points: list[TrendPoint] = []
    for date in sorted(by_date):
        group = by_date[date]
        points.append(TrendPoint(
            date=date,
            compliance_rate=aggregate(group).average_compliance_rate,
            total_inspections=len(group),
        ))
    return points
