"""Abbildung von Kalenderdaten auf Winkel des Radialkalenders.

Das Jahr läuft einmal im Uhrzeigersinn um den Kreis. Der 1. Januar liegt
bei 210°, jeder Monat belegt grob 30°.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)

YEAR_PHASE_OFFSET = 210.0

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DateLike = Union[date, datetime, str]


def normalize_angle(angle: float) -> float:
    """Winkel auf [0, 360)."""
    return ((angle % 360) + 360) % 360


def to_utc_datetime(value: DateLike) -> Optional[datetime]:
    """Wandelt date/datetime/ISO-Text in ein UTC-datetime; None wenn nicht lesbar.

    Naive Zeitangaben und reine Daten gelten als UTC (Mitternacht).
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def year_fraction(value: DateLike, year: int) -> float:
    """Anteil des Jahres (0 am 1.1. 00:00 UTC, 1 am 1.1. des Folgejahres).

    Schaltjahre ergeben sich aus den echten Jahresgrenzen.
    """
    dt = to_utc_datetime(value)
    if dt is None:
        logger.warning(f"Datum nicht lesbar: {value!r} – verwende Epoche")
        dt = EPOCH
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    return (dt - start).total_seconds() / (end - start).total_seconds()


def date_to_angle(value: DateLike, year: int) -> float:
    """Winkel eines Datums im Kalenderjahr `year`, Ergebnis in [0, 360)."""
    return normalize_angle(YEAR_PHASE_OFFSET + year_fraction(value, year) * 360)
