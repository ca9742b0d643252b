"""Excel-Export für einen Semesterplan (openpyxl)."""

import logging
from pathlib import Path

from geometry.radial import build_display_entries
from models.plan import UserPlan
from models.planner_data import PlannerData
from models.program_rule import RuleEvaluationResult

from export.helpers import (
    COLORS, category_label, definition_hex_color, exam_label,
    format_credits, today_str,
)

logger = logging.getLogger(__name__)


class ExcelExporter:
    """Exportiert einen Plan mit Übersichts- und Regelprüfungs-Blatt."""

    # Spaltenbreiten (Excel-Einheiten)
    OVERVIEW_WIDTHS = [6, 8, 38, 30, 6, 12, 12, 24, 6]
    CHECK_WIDTHS = [10, 44, 30]

    ROW_HEADER_H = 22

    def __init__(self, plan: UserPlan, data: PlannerData,
                 result: RuleEvaluationResult):
        self.plan = plan
        self.data = data
        self.result = result

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei mit beiden Blättern."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_uebersicht(wb)
        self._sheet_regelpruefung(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel gespeichert: {output_path}")
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], widths: list[int]) -> None:
        from openpyxl.styles import Alignment, Font
        from openpyxl.utils import get_column_letter
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border
            ws.column_dimensions[get_column_letter(col)].width = widths[col - 1]
        ws.row_dimensions[1].height = self.ROW_HEADER_H
        ws.freeze_panes = "A2"

    # ─── Blätter ──────────────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        """Ein Eintrag pro enthaltenem Angebot, in Anzeige-Reihenfolge."""
        ws = wb.create_sheet("Übersicht")
        self._write_header_row(
            ws,
            ["#", "Kürzel", "Modul", "Kategorie", "LP", "Start", "Ende", "Prüfung", "Lane"],
            self.OVERVIEW_WIDTHS,
        )
        border = self._thin_border()
        row = 2
        for entry in build_display_entries(self.plan, self.data):
            d, o = entry.definition, entry.offering
            values = [
                entry.display_order, d.short_code, d.name, category_label(d.category),
                d.credits, o.start_date, o.end_date, exam_label(entry.exam_option),
                entry.lane,
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = border
            ws.cell(row=row, column=2).fill = self._fill(definition_hex_color(d))
            row += 1

        from openpyxl.styles import Font
        ws.cell(row=row + 1, column=4, value="Summe LP").font = Font(bold=True)
        ws.cell(row=row + 1, column=5, value=self.result.applicable_credits).font = Font(bold=True)
        ws.cell(row=row + 2, column=1,
                value=f"{self.plan.name} · Stand {today_str()}")

    def _sheet_regelpruefung(self, wb) -> None:
        """Checkliste der Studiengangs-Regel, erfüllt grün / offen rot."""
        ws = wb.create_sheet("Regelprüfung")
        self._write_header_row(ws, ["Status", "Anforderung", "Details"], self.CHECK_WIDTHS)
        border = self._thin_border()
        for idx, req in enumerate(self.result.rows, 2):
            fill = self._fill(COLORS["met"] if req.met else COLORS["unmet"])
            values = ["erfüllt" if req.met else "offen", req.label, req.details or ""]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=idx, column=col, value=value)
                cell.fill = fill
                cell.border = border

        summary_row = len(self.result.rows) + 3
        ws.cell(
            row=summary_row, column=2,
            value=(
                f"{self.result.met_requirements}/{self.result.total_requirements} "
                f"erfüllt · {format_credits(self.result.applicable_credits)} LP"
            ),
        )
