"""SVG-Export des Radialkalenders (xml.etree.ElementTree)."""

import logging
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path
from typing import Optional

from config.schema import GeometryConfig
from export.helpers import MONTH_NAMES
from geometry.angles import date_to_angle
from geometry.arcs import describe_ring, polar_to_cartesian
from geometry.radial import compute_arcs, DisplayEntry
from geometry.zoom import ZoomFocus, make_angle_transform

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

ET.register_namespace("", SVG_NS)


def _fmt(value: float) -> str:
    return f"{value:.2f}"


class SvgExporter:
    """Zeichnet Monatsring, Kursbögen und Prüfungspunkte als SVG."""

    SIZE = 800
    ARC_WIDTH = 8
    EXAM_DOT_R = 4

    def __init__(self, entries: list[DisplayEntry], year: int,
                 focus: Optional[ZoomFocus] = None,
                 geometry: Optional[GeometryConfig] = None):
        self.entries = entries
        self.year = year
        self.focus = focus or ZoomFocus()
        self.geo = geometry or GeometryConfig()
        self.transform = make_angle_transform(self.focus)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def build(self) -> ET.Element:
        root = ET.Element(f"{{{SVG_NS}}}svg", {
            "width": str(self.SIZE),
            "height": str(self.SIZE),
            "viewBox": f"0 0 {self.SIZE} {self.SIZE}",
        })
        ET.SubElement(root, f"{{{SVG_NS}}}rect", {
            "width": "100%", "height": "100%", "fill": "#ffffff",
        })
        self._month_ring(root)
        self._course_arcs(root)
        return root

    def to_string(self) -> str:
        return ET.tostring(self.build(), encoding="unicode")

    def export(self, output_path: Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tree = ET.ElementTree(self.build())
        tree.write(output_path, encoding="utf-8", xml_declaration=True)
        logger.info(f"SVG gespeichert: {output_path}")
        return output_path

    # ─── Monatsring ───────────────────────────────────────────────────────────

    def _month_ring(self, root: ET.Element) -> None:
        geo = self.geo
        group = ET.SubElement(root, f"{{{SVG_NS}}}g", {"class": "months"})
        inner = geo.max_radius + 4
        outer = geo.month_label_radius - 8
        for month in range(12):
            start = self.transform(date_to_angle(date(self.year, month + 1, 1), self.year))
            next_start = (
                date(self.year + 1, 1, 1) if month == 11
                else date(self.year, month + 2, 1)
            )
            end = self.transform(date_to_angle(next_start, self.year))
            ET.SubElement(group, f"{{{SVG_NS}}}path", {
                "d": describe_ring(geo.center_x, geo.center_y, inner, outer, start, end),
                "fill": "#f2f2f2" if month % 2 == 0 else "#e6e6e6",
            })
            mid = self.transform(date_to_angle(date(self.year, month + 1, 15), self.year))
            x, y = polar_to_cartesian(geo.center_x, geo.center_y, geo.month_label_radius, mid)
            label = ET.SubElement(group, f"{{{SVG_NS}}}text", {
                "x": _fmt(x), "y": _fmt(y),
                "text-anchor": "middle", "font-size": "12",
            })
            label.text = MONTH_NAMES[month]

    # ─── Kursbögen ────────────────────────────────────────────────────────────

    def _course_arcs(self, root: ET.Element) -> None:
        group = ET.SubElement(root, f"{{{SVG_NS}}}g", {"class": "courses"})
        codes = {e.offering.id: e.definition.short_code for e in self.entries}
        for arc in compute_arcs(self.entries, self.year, self.transform, self.geo):
            arc_el = ET.SubElement(group, f"{{{SVG_NS}}}path", {
                "d": arc.path,
                "stroke": arc.color,
                "stroke-width": str(self.ARC_WIDTH),
                "stroke-linecap": "round",
                "fill": "none",
                "data-offering": arc.offering_id,
            })
            title = ET.SubElement(arc_el, f"{{{SVG_NS}}}title")
            title.text = codes.get(arc.offering_id, arc.offering_id)

            if arc.exam_guide_path:
                ET.SubElement(group, f"{{{SVG_NS}}}path", {
                    "d": arc.exam_guide_path,
                    "stroke": arc.color,
                    "stroke-width": "1",
                    "stroke-dasharray": "3 3",
                    "fill": "none",
                })
            ex, ey = arc.exam_point
            ET.SubElement(group, f"{{{SVG_NS}}}circle", {
                "cx": _fmt(ex), "cy": _fmt(ey),
                "r": str(self.EXAM_DOT_R), "fill": arc.color,
                "class": "exam",
            })
            if arc.midterm_point:
                mx, my = arc.midterm_point
                ET.SubElement(group, f"{{{SVG_NS}}}circle", {
                    "cx": _fmt(mx), "cy": _fmt(my),
                    "r": "3", "fill": "#ffffff", "stroke": arc.color,
                    "class": "midterm",
                })
