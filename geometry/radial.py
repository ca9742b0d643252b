"""Berechnete Bögen des Radialkalenders (Winkel, Radien, SVG-Pfade)."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from config.schema import GeometryConfig
from geometry.angles import date_to_angle
from geometry.arcs import describe_arc, polar_to_cartesian
from geometry.lanes import assign_lanes, course_radius
from models.course import CourseDefinition
from models.offering import CourseOffering, ExamOption
from models.plan import UserPlan
from models.planner_data import PlannerData

logger = logging.getLogger(__name__)


@dataclass
class DisplayEntry:
    """Ein enthaltenes Angebot, aufgelöst für die Darstellung."""

    offering: CourseOffering
    definition: CourseDefinition
    exam_option: Optional[ExamOption]
    display_order: int
    lane: int = 0


@dataclass
class ComputedArc:
    """Geometrie eines Kursbogens inkl. Prüfungs- und Zwischenprüfungspunkt."""

    offering_id: str
    path: str
    start_angle: float
    end_angle: float
    exam_angle: float
    radius: float
    color: str
    end_point: tuple[float, float]
    exam_anchor_point: tuple[float, float]
    exam_point: tuple[float, float]
    exam_guide_path: Optional[str] = None
    midterm_point: Optional[tuple[float, float]] = None
    midterm_angle: Optional[float] = None


def build_display_entries(plan: UserPlan, data: PlannerData) -> list[DisplayEntry]:
    """Enthaltene Auswahlen eines Plans nach display_order, mit Lane.

    Nicht auflösbare Auswahlen fallen weg. Die Lanes werden in der
    Anzeige-Reihenfolge vergeben.
    """
    entries: list[DisplayEntry] = []
    for selection in plan.included_selections():
        offering = data.offering_by_id(selection.offering_id)
        if offering is None:
            logger.debug(f"Darstellung: Angebot {selection.offering_id} unbekannt")
            continue
        definition = data.definition_by_id(offering.course_definition_id)
        if definition is None:
            logger.debug(f"Darstellung: Definition {offering.course_definition_id} unbekannt")
            continue
        entries.append(DisplayEntry(
            offering=offering,
            definition=definition,
            exam_option=offering.exam_option(selection.selected_exam_option_id),
            display_order=selection.display_order,
        ))

    lanes = assign_lanes(e.offering for e in entries)
    for entry in entries:
        entry.lane = lanes[entry.offering.id]
    return entries


def angular_distance(a: float, b: float) -> float:
    """Kürzester Winkelabstand in Grad (0–180)."""
    return abs(((a - b + 540) % 360) - 180)


def compute_arcs(
    entries: list[DisplayEntry],
    year: int,
    transform: Optional[Callable[[float], float]] = None,
    geometry: Optional[GeometryConfig] = None,
) -> list[ComputedArc]:
    """Berechnet für jeden Eintrag Bogen, Prüfungspunkt und Führungsbogen.

    transform bildet Kalenderwinkel auf Anzeigewinkel ab (Zoom-Fokus).
    """
    geo = geometry or GeometryConfig()
    cx, cy = geo.center_x, geo.center_y

    def angle_of(value: str) -> float:
        raw = date_to_angle(value, year)
        return transform(raw) if transform else raw

    arcs: list[ComputedArc] = []
    for entry in entries:
        offering = entry.offering
        radius = course_radius(entry.lane, geo.base_radius, geo.ring_spacing, geo.max_radius)

        start_angle = angle_of(offering.start_date)
        end_angle = angle_of(offering.end_date)
        exam_date = entry.exam_option.date if entry.exam_option else offering.end_date
        exam_angle = angle_of(exam_date)

        guide = None
        if angular_distance(exam_angle, end_angle) > geo.exam_guide_min_angle:
            guide = describe_arc(cx, cy, radius, end_angle, exam_angle)

        midterm_point = midterm_angle = None
        if offering.midterm_date:
            midterm_angle = angle_of(offering.midterm_date)
            midterm_point = polar_to_cartesian(cx, cy, radius, midterm_angle)

        arcs.append(ComputedArc(
            offering_id=offering.id,
            path=describe_arc(cx, cy, radius, start_angle, end_angle),
            start_angle=start_angle,
            end_angle=end_angle,
            exam_angle=exam_angle,
            radius=radius,
            color=entry.definition.color,
            end_point=polar_to_cartesian(cx, cy, radius, end_angle),
            exam_anchor_point=polar_to_cartesian(cx, cy, radius, exam_angle),
            exam_point=polar_to_cartesian(cx, cy, radius + geo.exam_offset, exam_angle),
            exam_guide_path=guide,
            midterm_point=midterm_point,
            midterm_angle=midterm_angle,
        ))
    return arcs
