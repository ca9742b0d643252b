"""Geometrie des Radialkalenders: Winkel, Zoom-Fokus, Lanes und Bögen."""

from .angles import date_to_angle, normalize_angle
from .zoom import (
    Season,
    ZoomFocus,
    ZoomLevel,
    focus_month,
    focus_season,
    remap_angle_by_focus,
    zoom_in,
    zoom_out,
)
from .lanes import assign_lanes, course_radius, intervals_overlap, parse_interval

__all__ = [
    "date_to_angle",
    "normalize_angle",
    "Season",
    "ZoomFocus",
    "ZoomLevel",
    "focus_month",
    "focus_season",
    "remap_angle_by_focus",
    "zoom_in",
    "zoom_out",
    "assign_lanes",
    "course_radius",
    "intervals_overlap",
    "parse_interval",
]
