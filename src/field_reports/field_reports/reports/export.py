"""Spreadsheet export for a single monthly report.

The sheet layout is fixed: organization banner, title, identification rows,
the weekly attendance table (one row per activity series) and the three
narrative rows. Weekly values and averages are written as display strings.
"""

from __future__ import annotations

import io
from typing import Any, Mapping, Optional

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill

from ..core.constants import EXPORT_SHEET_NAME, ORGANIZATION_NAME, REPORT_TITLE, WEEKS_PER_MONTH
from ..core.exceptions import RenderError
from .model import SERIES

ORG_NAME_FONT = Font(bold=True, size=16, color="FF0000FF")
TITLE_FONT = Font(bold=True)
SECTION_FONT = Font(bold=True)
HEADER_FONT = Font(bold=True)
CENTERED = Alignment(horizontal="center")
NO_FILL = PatternFill(fill_type=None)

ACTIVITY_HEADERS = ["Activities"] + [f"Week {i}" for i in range(1, WEEKS_PER_MONTH + 1)] + ["Average"]

IDENTIFICATION_ROWS = (
    ("ID", "id"),
    ("Month Of:", "monthOf"),
    ("Worker Name:", "workerName"),
    ("Area Of Assignment:", "areaOfAssignment"),
    ("Name Of Church:", "nameOfChurch"),
)

NARRATIVE_ROWS = (
    ("Narrative Report:", "narrativeReport"),
    ("Challenges/Problems encountered:", "challengesAndProblemEncountered"),
    ("Prayer Requests:", "prayerRequest"),
)


def format_values(values) -> str:
    return ", ".join(str(v) for v in values)


def format_average(avg: float) -> str:
    return f"(Average: {avg:.2f})"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class ReportExcelExporter:
    def __init__(self, *, sheet_name: str = EXPORT_SHEET_NAME):
        self._sheet_name = sheet_name

    def build_rows(self, view: Mapping[str, Any]) -> list[list[Optional[str]]]:
        rows: list[list[Optional[str]]] = [[ORGANIZATION_NAME], [REPORT_TITLE]]
        for label, key in IDENTIFICATION_ROWS:
            rows.append([label, _text(view.get(key))])

        rows.append(["Weekly Attendance"])
        rows.append(list(ACTIVITY_HEADERS))

        for s in SERIES:
            rows.append([s.label, format_values(view.get(s.key) or []), format_average(float(view.get(s.avg_key) or 0.0))])

        for label, key in NARRATIVE_ROWS:
            rows.append([label, _text(view.get(key))])
        return rows

    def render(self, view: Mapping[str, Any]) -> bytes:
        """Render one averaged report view into ``.xlsx`` bytes."""
        try:
            rows = self.build_rows(view)
            width = max(len(r) for r in rows)
            df = pd.DataFrame([r + [None] * (width - len(r)) for r in rows], dtype=object)

            output = io.BytesIO()
            with pd.ExcelWriter(output, engine="openpyxl") as writer:
                df.to_excel(writer, index=False, header=False, sheet_name=self._sheet_name)
                self._apply_styles(writer.sheets[self._sheet_name])
            return output.getvalue()
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"Failed to render report spreadsheet: {exc}") from exc

    @staticmethod
    def _apply_styles(ws) -> None:
        # openpyxl reads a leading "=" as a formula; every cell here is display text
        for row in ws.iter_rows():
            for cell in row:
                if isinstance(cell.value, str) and cell.value.startswith("="):
                    cell.data_type = "s"

        org = ws.cell(row=1, column=1)
        org.font = ORG_NAME_FONT
        org.alignment = CENTERED

        title = ws.cell(row=2, column=1)
        title.font = TITLE_FONT
        title.alignment = CENTERED

        section_row = 3 + len(IDENTIFICATION_ROWS)
        ws.cell(row=section_row, column=1).font = SECTION_FONT

        for col in range(1, len(ACTIVITY_HEADERS) + 1):
            cell = ws.cell(row=section_row + 1, column=col)
            cell.font = HEADER_FONT
            cell.fill = NO_FILL
