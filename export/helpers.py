"""Gemeinsame Hilfsfunktionen für Terminal-, SVG- und Excel-Export."""

from datetime import date
from typing import Optional

from models.course import CATEGORY_LABELS, CourseCategory, CourseDefinition
from models.offering import ExamOption

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "met":        "C6EFCE",
    "unmet":      "FFC7CE",
    "header":     "4472C4",
    "mandatory":  "FFF2B3",
    "sonstig":    "E0E0E0",
}

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

EXAM_TYPE_LABELS = {
    "written": "Klausur",
    "oral": "Mündlich",
    "project": "Projekt",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def format_credits(value: float) -> str:
    return f"{value:g}"


def category_label(category: Optional[CourseCategory]) -> str:
    if category is None:
        return "—"
    return f"{category.value} – {CATEGORY_LABELS[category]}"


def definition_hex_color(definition: CourseDefinition) -> str:
    """Definitionsfarbe als RRGGBB (für openpyxl), Fallback grau."""
    color = (definition.color or "").lstrip("#")
    if len(color) == 6:
        return color.upper()
    return COLORS["sonstig"]


def exam_label(option: Optional[ExamOption]) -> str:
    """z.B. "Klausur 2026-07-30"."""
    if option is None:
        return "—"
    return f"{EXAM_TYPE_LABELS.get(option.type.value, option.type.value)} {option.date}"
