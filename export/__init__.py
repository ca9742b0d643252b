"""Export-Modul: SVG (Radialkalender) und Excel (openpyxl) für einen Plan."""

from export.excel_export import ExcelExporter
from export.svg_export import SvgExporter

__all__ = ["ExcelExporter", "SvgExporter"]
