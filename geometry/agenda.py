"""Monatsansicht des Radialkalenders: Vorlesungs- und Prüfungstermine je Tag.

Studienjahr-Zyklus: März bis Dezember liegen im Studienjahr selbst,
Januar und Februar im Folgejahr.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from geometry.angles import DateLike, to_utc_datetime
from geometry.radial import DisplayEntry
from geometry.zoom import SEASON_MONTHS, Season
from models.offering import CourseOffering, ExamType

logger = logging.getLogger(__name__)


@dataclass
class DayEvent:
    """Ein Termin an einem Kalendertag."""

    id: str
    label: str
    color: str
    kind: str                      # "lecture", "exam" oder "project"
    day: date
    time_range: Optional[str] = None
    exam_type: Optional[ExamType] = None
    is_reexam: bool = False


def to_utc_day(value: DateLike) -> Optional[date]:
    """Kalendertag (UTC) eines Datums; None wenn nicht lesbar."""
    dt = to_utc_datetime(value)
    return dt.date() if dt is not None else None


def calendar_year_for_month(academic_year: int, month: int) -> int:
    """Kalenderjahr eines 0-basierten Monats im Studienjahr."""
    return academic_year + 1 if month <= 1 else academic_year


def _month_bounds(academic_year: int, month: int) -> tuple[date, date]:
    year = calendar_year_for_month(academic_year, month)
    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, 1), date(year, month + 1, last_day)


def _add(events: dict[int, list[DayEvent]], event: DayEvent) -> None:
    events.setdefault(event.day.day, []).append(event)


def _lecture_events(entry: DisplayEntry, start: date, end: date,
                    month_start: date, month_end: date) -> list[DayEvent]:
    offering, code = entry.offering, entry.definition.short_code
    color = entry.definition.color
    sessions = offering.get_lecture_sessions()

    result: list[DayEvent] = []
    if sessions:
        for session in sessions:
            day = to_utc_day(session.date)
            if day is None or not month_start <= day <= month_end:
                continue
            result.append(DayEvent(
                id=f"{offering.id}-lecture-{session.id}-{day.isoformat()}",
                label=f"{code} lecture", color=color, kind="lecture",
                day=day, time_range=session.time_range(),
            ))
        return result

    # Ohne explizite Termine: wöchentlich am Wochentag des Vorlesungsbeginns
    cursor = max(start, month_start)
    cursor += timedelta(days=(start.weekday() - cursor.weekday()) % 7)
    while cursor <= end and cursor <= month_end:
        result.append(DayEvent(
            id=f"{offering.id}-lecture-{cursor.isoformat()}",
            label=f"{code} lecture", color=color, kind="lecture", day=cursor,
        ))
        cursor += timedelta(days=7)
    return result


def _exam_events(entry: DisplayEntry, month_start: date,
                 month_end: date) -> list[DayEvent]:
    offering, code = entry.offering, entry.definition.short_code
    options = offering.exam_options or ([entry.exam_option] if entry.exam_option else [])

    result: list[DayEvent] = []
    for index, option in enumerate(options):
        kind = "project" if option.type == ExamType.PROJECT else "exam"
        for value, is_reexam in ((option.date, False), (option.reexam_date, True)):
            if not value:
                continue
            day = to_utc_day(value)
            if day is None or not month_start <= day <= month_end:
                continue
            prefix = "reexam" if is_reexam else "exam"
            label = (
                f"{code} reexam {option.type.value}" if is_reexam
                else f"{code} {option.type.value}"
            )
            result.append(DayEvent(
                id=f"{offering.id}-{prefix}-{index}-{day.isoformat()}",
                label=label, color=entry.definition.color, kind=kind, day=day,
                exam_type=option.type, is_reexam=is_reexam,
            ))
    return result


def build_month_events(
    entries: list[DisplayEntry], academic_year: int, month: int
) -> dict[int, list[DayEvent]]:
    """Termine eines Monats, gruppiert nach Tag des Monats.

    Nur Angebote, deren Zeitraum den Monat berührt, liefern Termine.
    Prüfungs- und Wiederholungstermine kommen aus allen Optionen des
    Angebots, ohne Optionen aus der gewählten.

    Args:
        entries: Enthaltene Angebote eines Plans (siehe build_display_entries).
        academic_year: Studienjahr des Plans.
        month: 0-basierter Monat (0 = Januar).

    Returns:
        {Tag: [DayEvent, ...]} in Reihenfolge der Einträge.
    """
    month_start, month_end = _month_bounds(academic_year, month)
    events: dict[int, list[DayEvent]] = {}

    for entry in entries:
        start = to_utc_day(entry.offering.start_date)
        end = to_utc_day(entry.offering.end_date)
        if start is None or end is None:
            logger.warning(
                f"Monatsansicht: Zeitraum von {entry.offering.id} nicht lesbar, übersprungen"
            )
            continue
        if end < month_start or start > month_end:
            continue
        for event in _lecture_events(entry, start, end, month_start, month_end):
            _add(events, event)
        for event in _exam_events(entry, month_start, month_end):
            _add(events, event)

    return events


def offering_overlaps_season(offering: CourseOffering, season: Season) -> bool:
    """True wenn ein Monat des Angebotszeitraums in die Jahreszeit fällt."""
    start = to_utc_day(offering.start_date)
    end = to_utc_day(offering.end_date)
    if start is None or end is None:
        return False
    months = SEASON_MONTHS[Season(season)]
    year, month = start.year, start.month
    while date(year, month, 1) <= end:
        if month - 1 in months:
            return True
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return False


def entries_for_season(entries: list[DisplayEntry], season: Season) -> list[DisplayEntry]:
    """Einträge, die in der fokussierten Jahreszeit sichtbar sind."""
    return [e for e in entries if offering_overlaps_season(e.offering, season)]
