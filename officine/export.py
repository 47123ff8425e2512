"""CSV and JSON exports of inspection records.

Pure functions: they build strings and hand them back. Writing the file or
triggering the download is the caller's job.

Usage:
    from officine.export import export_csv, export_report

    csv_text = export_csv(inspections, grid_map())
    report = export_report(inspection, responses)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from officine.config import settings
from officine.formatters import status_label
from officine.kpi import inspection_stats, read_field

logger = logging.getLogger(__name__)

CSV_HEADERS = (
    "Établissement",
    "Grille",
    "Inspecteur(s)",
    "Date",
    "Statut",
    "Total critères",
    "Réponses",
    "Conforme",
    "Non-conforme",
    "% Conformité",
)

_INSPECTION_FIELDS = (
    "id",
    "establishment",
    "grid_id",
    "inspection_type",
    "date_inspection",
    "status",
    "inspectors",
    "created_by",
    "created_by_name",
    "created_at",
    "validated_by",
    "validated_by_name",
    "validated_at",
)


def _escape_csv(value: Any) -> str:
    """Quote a field containing a comma, a quote or a newline; double inner quotes."""
    if value is None:
        return ""
    text = str(getattr(value, "value", value))
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=settings.export.json_indent, ensure_ascii=False)


def _plain(value: Any) -> Any:
    """Turn pydantic records (and lists of them) into JSON-ready values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return getattr(value, "value", value)


def _inspection_fields(inspection: Any) -> dict[str, Any]:
    return {name: _plain(read_field(inspection, name)) for name in _INSPECTION_FIELDS}


def export_csv(inspections: Iterable[Any] | None, grid_map: Mapping[str, Any] | None = None) -> str:
    """One row per inspection under the fixed French header.

    Returns "" (not a header-only document) when there is nothing to export.
    """
    items = list(inspections or [])
    if not items:
        return ""

    grids = grid_map or {}
    lines = [",".join(CSV_HEADERS)]
    for insp in items:
        grid_id = read_field(insp, "grid_id")
        grid = grids.get(grid_id)
        grid_name = read_field(grid, "name") if grid is not None else grid_id
        inspectors = settings.export.csv_inspectors_separator.join(read_field(insp, "inspectors") or [])
        stats = inspection_stats(insp)

        row = [
            _escape_csv(read_field(insp, "establishment")),
            _escape_csv(grid_name),
            _escape_csv(inspectors),
            _escape_csv(read_field(insp, "date_inspection")),
            _escape_csv(status_label(read_field(insp, "status"))),
            str(stats.total_criteria),
            str(stats.answered),
            str(stats.conforme),
            str(stats.non_conforme),
            f"{stats.compliance_rate}%",
        ]
        lines.append(",".join(row))

    logger.debug("Exported %d inspection(s) to CSV", len(items))
    return "\n".join(lines)


def export_json(
    inspections: Iterable[Any] | None,
    responses: Mapping[str, Iterable[Any]] | None = None,
) -> str:
    """Indented JSON array, one object per inspection with its progress and responses.

    ``responses`` maps inspection id to that inspection's responses.
    Returns "[]" when there is nothing to export.
    """
    items = list(inspections or [])
    if not items:
        return "[]"

    by_inspection = responses or {}
    data = []
    for insp in items:
        stats = inspection_stats(insp)
        record = _inspection_fields(insp)
        record["progress"] = {
            "total_criteria": stats.total_criteria,
            "answered": stats.answered,
            "conforme": stats.conforme,
            "non_conforme": stats.non_conforme,
            "completion_rate": stats.completion_rate,
            "compliance_rate": stats.compliance_rate,
        }
        record["responses"] = _plain(list(by_inspection.get(record["id"], [])))
        data.append(record)

    logger.debug("Exported %d inspection(s) to JSON", len(items))
    return _dumps(data)


def export_report(inspection: Any, responses: Iterable[Any] | None = None) -> str:
    """Single-inspection report: ``{inspection, summary, responses}``.

    Returns "{}" for a missing inspection. Key order is fixed so reports
    diff cleanly against golden files.
    """
    if inspection is None:
        return "{}"

    stats = inspection_stats(inspection)
    report = {
        "inspection": _inspection_fields(inspection),
        "summary": {
            "total_criteria": stats.total_criteria,
            "answered": stats.answered,
            "pending": stats.pending,
            "conforme": stats.conforme,
            "non_conforme": stats.non_conforme,
            "completion_rate": stats.completion_rate,
            "compliance_rate": stats.compliance_rate,
        },
        "responses": _plain(list(responses or [])),
    }
    return _dumps(report)
