"""Lane-Zuweisung: überlappende Kurszeiträume auf konzentrische Ringe verteilen.

Greedy First-Fit in der vom Aufrufer vorgegebenen Reihenfolge. Die Anzahl
der Lanes ist für Intervallgraphen minimal; welches Angebot in welcher Lane
landet, hängt von der Reihenfolge ab.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Iterable, Optional

from geometry.angles import EPOCH, DateLike, to_utc_datetime

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from models.offering import CourseOffering


@dataclass(frozen=True)
class DateInterval:
    """Geschlossener Zeitraum [start, end] mit start <= end."""

    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


def parse_interval(start: DateLike, end: DateLike) -> DateInterval:
    """Normalisiert zwei Daten zu einem Intervall (vertauscht wenn nötig).

    Ist nur ein Datum lesbar, fällt das andere darauf (Null-Intervall); sind
    beide unlesbar, ergibt sich ein Null-Intervall bei 1970-01-01.
    """
    s = to_utc_datetime(start)
    e = to_utc_datetime(end)
    if s is None or e is None:
        logger.warning(
            f"Lane-Zuweisung: Zeitraum {start!r} – {end!r} nicht lesbar, Null-Intervall"
        )
        s = e = s or e or EPOCH
    if e < s:
        s, e = e, s
    return DateInterval(start=s, end=e)


def intervals_overlap(a: DateInterval, b: DateInterval) -> bool:
    """True wenn sich die Intervalle echt überschneiden.

    Berühren (a.end == b.start) gilt nicht als Überschneidung. Daraus folgt
    auch: Null-Intervalle überschneiden sich nie, selbst zwei identische
    (etwa zwei unlesbare Zeiträume, beide auf die Epoche gefallen) teilen
    sich eine Lane.
    """
    return a.start < b.end and b.start < a.end


def assign_lanes(offerings: Iterable["CourseOffering"]) -> dict[str, int]:
    """Ordnet jedem Angebot die erste Lane ohne Überschneidung zu.

    Args:
        offerings: Objekte mit id, start_date, end_date in Anzeige-Reihenfolge.

    Returns:
        {offering_id: lane_index}, Lanes beginnen bei 0.
    """
    lanes: list[list[DateInterval]] = []
    result: dict[str, int] = {}

    for offering in offerings:
        interval = parse_interval(offering.start_date, offering.end_date)
        chosen: Optional[int] = None
        for index, occupied in enumerate(lanes):
            if all(not intervals_overlap(interval, other) for other in occupied):
                chosen = index
                break
        if chosen is None:
            lanes.append([])
            chosen = len(lanes) - 1
        lanes[chosen].append(interval)
        result[offering.id] = chosen

    logger.debug(f"Lane-Zuweisung: {len(result)} Angebote auf {len(lanes)} Lanes")
    return result


def lane_count(lanes: dict[str, int]) -> int:
    return max(lanes.values()) + 1 if lanes else 0


def sort_for_lanes(offerings: Iterable["CourseOffering"]) -> list:
    """Stabile Standard-Reihenfolge: Startdatum (Text), dann ID."""
    return sorted(offerings, key=lambda o: (str(o.start_date), o.id))


def course_radius(
    lane: int, base: float = 146, spacing: float = 14, max_radius: float = 305
) -> float:
    """Radius einer Lane, nach außen auf max_radius begrenzt."""
    return min(base + lane * spacing, max_radius)
