"""Tests for the CSV / JSON exports and the French display labels."""

from __future__ import annotations

import json

import pytest

from officine.export import CSV_HEADERS, export_csv, export_json, export_report
from officine.formatters import role_label, status_color, status_label
from officine.grids import grid_map
from officine.schemas.inspections import Inspection, Progress, Response


def _inspection(**overrides) -> Inspection:
    data = {
        "id": "insp-1",
        "grid_id": "officine",
        "status": "completed",
        "date_inspection": "2024-01-15",
        "establishment": "Pharmacie du Centre",
        "inspection_type": "initiale",
        "inspectors": ["Awa Diallo", "Koffi Mensah"],
        "created_at": "2024-01-15 09:00:00",
        "updated_at": "2024-01-15 11:00:00",
        "progress": Progress(total=100, answered=80, conforme=60, non_conforme=20),
    }
    data.update(overrides)
    return Inspection(**data)


def _responses() -> list[Response]:
    return [
        Response(criterion_id=1, conforme=True, updated_at="2024-01-15 10:00:00"),
        Response(criterion_id=2, conforme=False, observation="Registre absent", updated_at="2024-01-15 10:01:00"),
    ]


# ── CSV ──────────────────────────────────────────────────────────────


class TestCsv:
    def test_empty(self) -> None:
        assert export_csv([]) == ""
        assert export_csv(None) == ""

    def test_header_and_row(self) -> None:
        lines = export_csv([_inspection()], grid_map()).split("\n")
        assert lines[0] == ",".join(CSV_HEADERS)
        assert len(CSV_HEADERS) == 10
        assert len(lines) == 2

    def test_row_values(self) -> None:
        row = export_csv([_inspection()]).split("\n")[1]
        assert row == 'Pharmacie du Centre,officine,"Awa Diallo, Koffi Mensah",2024-01-15,Terminée,100,80,60,20,75%'

    def test_grid_name_from_map(self) -> None:
        row = export_csv([_inspection()], grid_map()).split("\n")[1]
        assert row.split(",")[1] == grid_map()["officine"].name

    def test_quotes_doubled(self) -> None:
        csv_text = export_csv([_inspection(establishment='Pharmacy "ABC" & Co')])
        assert '"Pharmacy ""ABC"" & Co"' in csv_text

    def test_newline_quoted(self) -> None:
        csv_text = export_csv([_inspection(establishment="Ligne 1\nLigne 2")])
        assert '"Ligne 1\nLigne 2"' in csv_text

    def test_one_row_per_inspection(self) -> None:
        csv_text = export_csv([_inspection(id=str(i)) for i in range(4)])
        assert len(csv_text.split("\n")) == 5

    def test_accepts_mappings(self) -> None:
        record = _inspection().model_dump()
        assert export_csv([record]).endswith("75%")


# ── JSON ─────────────────────────────────────────────────────────────


class TestJson:
    def test_empty(self) -> None:
        assert export_json([]) == "[]"

    def test_structure(self) -> None:
        data = json.loads(export_json([_inspection()], {"insp-1": _responses()}))
        assert len(data) == 1
        record = data[0]
        assert record["id"] == "insp-1"
        assert record["status"] == "completed"
        assert record["inspectors"] == ["Awa Diallo", "Koffi Mensah"]
        assert record["progress"]["compliance_rate"] == 75
        assert record["progress"]["completion_rate"] == 80
        assert [r["criterion_id"] for r in record["responses"]] == [1, 2]

    def test_missing_responses(self) -> None:
        data = json.loads(export_json([_inspection()]))
        assert data[0]["responses"] == []

    def test_non_ascii_kept(self) -> None:
        text = export_json([_inspection(establishment="Dépôt Nord")])
        assert "Dépôt Nord" in text

    def test_indented(self) -> None:
        assert export_json([_inspection()]).startswith("[\n  {")


class TestReport:
    def test_missing_inspection(self) -> None:
        assert export_report(None) == "{}"

    def test_sections_in_order(self) -> None:
        report = json.loads(export_report(_inspection(), _responses()))
        assert list(report) == ["inspection", "summary", "responses"]
        assert report["summary"]["pending"] == 20
        assert report["summary"]["compliance_rate"] == 75
        assert report["responses"][1]["observation"] == "Registre absent"


# ── Labels ───────────────────────────────────────────────────────────


class TestLabels:
    @pytest.mark.parametrize(
        ("status", "label"),
        [
            ("draft", "Brouillon"),
            ("in_progress", "En cours"),
            ("completed", "Terminée"),
            ("validated", "Validée"),
            ("archived", "Archivée"),
        ],
    )
    def test_status_label(self, status: str, label: str) -> None:
        assert status_label(status) == label

    def test_unknown_status_passthrough(self) -> None:
        assert status_label("lost") == "lost"

    def test_role_label(self) -> None:
        assert role_label("admin") == "Admin"
        assert role_label("inspector") == "Inspecteur"

    def test_status_color(self) -> None:
        assert status_color("draft") == "#A0A0A0"
        assert status_color("lost") == "#000000"
