"""SVG-Pfade für Bögen, Ringe und Sektoren des Radialkalenders.

0° liegt oben, Winkel laufen im Uhrzeigersinn.
"""

import math


def polar_to_cartesian(cx: float, cy: float, r: float, angle_deg: float) -> tuple[float, float]:
    rad = math.radians(angle_deg - 90)
    return cx + r * math.cos(rad), cy + r * math.sin(rad)


def describe_arc(cx: float, cy: float, r: float, start_angle: float, end_angle: float) -> str:
    """Kreisbogen von start nach end gegen den Uhrzeigersinn (sweep 0)."""
    sx, sy = polar_to_cartesian(cx, cy, r, start_angle)
    ex, ey = polar_to_cartesian(cx, cy, r, end_angle)
    ccw_span = (start_angle - end_angle + 360) % 360
    large_arc = 1 if ccw_span > 180 else 0
    return f"M {sx} {sy} A {r} {r} 0 {large_arc} 0 {ex} {ey}"


def describe_ring(
    cx: float, cy: float, inner_radius: float, outer_radius: float,
    start_angle: float, end_angle: float,
) -> str:
    """Geschlossenes Ringsegment zwischen zwei Radien."""
    osx, osy = polar_to_cartesian(cx, cy, outer_radius, start_angle)
    oex, oey = polar_to_cartesian(cx, cy, outer_radius, end_angle)
    iex, iey = polar_to_cartesian(cx, cy, inner_radius, end_angle)
    isx, isy = polar_to_cartesian(cx, cy, inner_radius, start_angle)
    large_arc = 1 if (end_angle - start_angle + 360) % 360 > 180 else 0
    return " ".join([
        f"M {osx} {osy}",
        f"A {outer_radius} {outer_radius} 0 {large_arc} 1 {oex} {oey}",
        f"L {iex} {iey}",
        f"A {inner_radius} {inner_radius} 0 {large_arc} 0 {isx} {isy}",
        "Z",
    ])


def describe_sector(
    cx: float, cy: float, inner_radius: float, outer_radius: float,
    start_angle: float, end_angle: float,
) -> str:
    """Wie describe_ring, beginnt aber am Innenradius (für Hover-Flächen)."""
    osx, osy = polar_to_cartesian(cx, cy, outer_radius, start_angle)
    oex, oey = polar_to_cartesian(cx, cy, outer_radius, end_angle)
    iex, iey = polar_to_cartesian(cx, cy, inner_radius, end_angle)
    isx, isy = polar_to_cartesian(cx, cy, inner_radius, start_angle)
    large_arc = 1 if (end_angle - start_angle + 360) % 360 > 180 else 0
    return " ".join([
        f"M {isx} {isy}",
        f"L {osx} {osy}",
        f"A {outer_radius} {outer_radius} 0 {large_arc} 1 {oex} {oey}",
        f"L {iex} {iey}",
        f"A {inner_radius} {inner_radius} 0 {large_arc} 0 {isx} {isy}",
        "Z",
    ])
