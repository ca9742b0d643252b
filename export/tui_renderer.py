"""Tabellenzeilen für die Terminal-Anzeige (Rich).

Wird von den CLI-Befehlen check, lanes, plan show und zoom verwendet.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geometry.radial import DisplayEntry
    from geometry.zoom import ZoomFocus
    from models.plan import UserPlan
    from models.planner_data import PlannerData
    from models.program_rule import RuleEvaluationResult


def render_checklist_rows(result: "RuleEvaluationResult") -> list[list[str]]:
    """Zeilen: [Status, Anforderung, Details]."""
    rows: list[list[str]] = []
    for row in result.rows:
        status = "[green]✓[/green]" if row.met else "[red]✗[/red]"
        rows.append([status, row.label, row.details or ""])
    return rows


def render_lane_rows(entries: list["DisplayEntry"], year: int) -> list[list[str]]:
    """Zeilen: [Lane, Kürzel, Start, Ende, Startwinkel, Endwinkel]."""
    from geometry.angles import date_to_angle

    rows: list[list[str]] = []
    for entry in sorted(entries, key=lambda e: (e.lane, e.display_order)):
        o = entry.offering
        rows.append([
            str(entry.lane),
            entry.definition.short_code,
            o.start_date,
            o.end_date,
            f"{date_to_angle(o.start_date, year):.1f}°",
            f"{date_to_angle(o.end_date, year):.1f}°",
        ])
    return rows


def render_plan_rows(plan: "UserPlan", data: "PlannerData") -> list[list[str]]:
    """Zeilen: [#, enthalten, Kürzel, Name, Kategorie, LP, Zeitraum, Prüfung]."""
    from export.helpers import exam_label, format_credits

    rows: list[list[str]] = []
    for sel in sorted(plan.selected_offerings, key=lambda s: (not s.is_included, s.display_order)):
        offering = data.offering_by_id(sel.offering_id)
        definition = (
            data.definition_by_id(offering.course_definition_id) if offering else None
        )
        if offering is None or definition is None:
            rows.append([str(sel.display_order), "?", "?", sel.offering_id, "", "", "", ""])
            continue
        rows.append([
            str(sel.display_order),
            "[green]●[/green]" if sel.is_included else "[dim]○[/dim]",
            definition.short_code,
            definition.name,
            definition.category.value if definition.category else "—",
            format_credits(definition.credits),
            f"{offering.start_date} – {offering.end_date}",
            exam_label(offering.exam_option(sel.selected_exam_option_id)),
        ])
    return rows


def render_zoom_rows(focus: "ZoomFocus", year: int) -> list[list[str]]:
    """Zeilen je Monat: [Monat, Kalenderwinkel, Anzeigewinkel]."""
    from datetime import date
    from export.helpers import MONTH_NAMES
    from geometry.angles import date_to_angle
    from geometry.zoom import remap_angle_by_focus

    rows: list[list[str]] = []
    for month in range(12):
        raw = date_to_angle(date(year, month + 1, 1), year)
        rows.append([
            MONTH_NAMES[month],
            f"{raw:.1f}°",
            f"{remap_angle_by_focus(raw, focus):.1f}°",
        ])
    return rows


def render_agenda_rows(events_by_day: dict) -> list[list[str]]:
    """Zeilen der Monatsansicht: [Tag, Art, Eintrag, Zeit]."""
    rows: list[list[str]] = []
    for day in sorted(events_by_day):
        for event in events_by_day[day]:
            rows.append([
                f"{event.day:%d.%m.%Y}",
                event.kind,
                event.label,
                event.time_range or "",
            ])
    return rows
