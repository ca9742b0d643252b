"""Zoom-Fokus des Radialkalenders: Jahr → Jahreszeit → Monat.

Der fokussierte Sektor (Jahreszeit 90°, Monat 30°) wird auf 240° gedehnt,
der Rest des Kreises auf die übrigen 120° gestaucht. Die Abbildung ist
stückweise linear, stetig und monoton; Phase 0 und Phase 360 landen auf
demselben Punkt.

Die Zustandsübergänge sind reine Funktionen; das aktuelle Datum wird
explizit übergeben.
"""

from datetime import date
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, Field

from geometry.angles import YEAR_PHASE_OFFSET, normalize_angle


class ZoomLevel(str, Enum):
    YEAR = "year"
    SEASON = "season"
    MONTH = "month"


class Season(str, Enum):
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"


SEASON_START: dict[Season, float] = {
    Season.SUMMER: 315,
    Season.SPRING: 45,
    Season.WINTER: 135,
    Season.AUTUMN: 225,
}

SEASON_SPAN = 90.0
MONTH_SPAN = 30.0
EXPANDED_SPAN = 240.0

# Monatsindizes 0-basiert (0 = Januar)
SEASON_MONTHS: dict[Season, list[int]] = {
    Season.SUMMER: [5, 6, 7],
    Season.SPRING: [2, 3, 4],
    Season.WINTER: [11, 0, 1],
    Season.AUTUMN: [8, 9, 10],
}

DEFAULT_MONTH_BY_SEASON: dict[Season, int] = {
    Season.SUMMER: 6,
    Season.SPRING: 3,
    Season.WINTER: 0,
    Season.AUTUMN: 9,
}


class ZoomFocus(BaseModel):
    """Aktueller Zoom-Zustand."""

    level: ZoomLevel = ZoomLevel.YEAR
    season: Optional[Season] = None
    month: Optional[int] = Field(None, ge=0, le=11)


# ─── Winkel-Abbildung ─────────────────────────────────────────────────────────

def season_start_angle(season: Season) -> float:
    return SEASON_START[Season(season)]


def month_start_angle(month: int) -> float:
    return normalize_angle(YEAR_PHASE_OFFSET + month * 30)


def remap_sector(
    angle: float, focus_start: float, focus_span: float, expanded_span: float
) -> float:
    """Dehnt [focus_start, focus_start + focus_span] auf expanded_span Grad."""
    phase = normalize_angle(normalize_angle(angle) - focus_start)
    remaining_in = 360 - focus_span
    remaining_out = 360 - expanded_span

    if phase <= focus_span:
        mapped = (phase / focus_span) * expanded_span
    else:
        mapped = expanded_span + ((phase - focus_span) / remaining_in) * remaining_out

    return normalize_angle(focus_start + mapped)


def remap_angle_by_focus(angle: float, focus: ZoomFocus) -> float:
    """Bildet einen Kalenderwinkel auf den Zoom-Fokus ab (Jahr = Identität)."""
    if focus.level == ZoomLevel.SEASON and focus.season is not None:
        return remap_sector(
            angle, season_start_angle(focus.season), SEASON_SPAN, EXPANDED_SPAN
        )
    if focus.level == ZoomLevel.MONTH and focus.month is not None:
        return remap_sector(
            angle, month_start_angle(focus.month), MONTH_SPAN, EXPANDED_SPAN
        )
    return normalize_angle(angle)


def make_angle_transform(focus: ZoomFocus) -> Callable[[float], float]:
    return lambda angle: remap_angle_by_focus(angle, focus)


# ─── Jahreszeiten ─────────────────────────────────────────────────────────────

def month_to_season(month: int) -> Season:
    """0-basierter Monat → Jahreszeit (Dez–Feb Winter)."""
    if 2 <= month <= 4:
        return Season.SPRING
    if 5 <= month <= 7:
        return Season.SUMMER
    if 8 <= month <= 10:
        return Season.AUTUMN
    return Season.WINTER


def season_for_date(today: date) -> Season:
    return month_to_season(today.month - 1)


# ─── Zustandsübergänge ────────────────────────────────────────────────────────

def zoom_in(focus: ZoomFocus, today: date) -> ZoomFocus:
    """Jahr → Jahreszeit (aktuelle), Jahreszeit → Monat (repräsentativer)."""
    if focus.level == ZoomLevel.YEAR:
        return ZoomFocus(
            level=ZoomLevel.SEASON,
            season=focus.season or season_for_date(today),
        )
    if focus.level == ZoomLevel.SEASON:
        season = focus.season or season_for_date(today)
        return ZoomFocus(
            level=ZoomLevel.MONTH,
            season=season,
            month=DEFAULT_MONTH_BY_SEASON[season],
        )
    return focus


def zoom_out(focus: ZoomFocus, today: date) -> ZoomFocus:
    """Monat → Jahreszeit (bleibt erhalten), Jahreszeit → Jahr."""
    if focus.level == ZoomLevel.MONTH:
        if focus.season is not None:
            season = focus.season
        elif focus.month is not None:
            season = month_to_season(focus.month)
        else:
            season = season_for_date(today)
        return ZoomFocus(level=ZoomLevel.SEASON, season=season)
    if focus.level == ZoomLevel.SEASON:
        return ZoomFocus(level=ZoomLevel.YEAR)
    return focus


def reset_zoom() -> ZoomFocus:
    return ZoomFocus(level=ZoomLevel.YEAR)


def focus_season(season: Season) -> ZoomFocus:
    """Klick auf eine Jahreszeit-Beschriftung."""
    return ZoomFocus(level=ZoomLevel.SEASON, season=Season(season))


def focus_month(month: int, season: Optional[Season] = None) -> ZoomFocus:
    """Klick auf eine Monatsbeschriftung (auch direkt aus der Jahresansicht)."""
    return ZoomFocus(
        level=ZoomLevel.MONTH,
        season=Season(season) if season is not None else month_to_season(month),
        month=month,
    )
