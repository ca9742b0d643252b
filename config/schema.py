from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional


# ─── GEOMETRIE (Radialkalender) ───

class GeometryConfig(BaseModel):
    """Darstellungsparameter des Radialkalenders (SVG-Einheiten)."""
    # Radius der innersten Lane
    base_radius: float = Field(146, gt=0,
        description="Radius der Lane 0")
    # Abstand zwischen zwei Lanes
    ring_spacing: float = Field(14, gt=0,
        description="Abstand zwischen benachbarten Lanes")
    # Äußerster zulässiger Lane-Radius (höhere Lanes werden geklemmt)
    max_radius: float = Field(305, gt=0,
        description="Maximaler Lane-Radius")
    # Mittelpunkt der Zeichenfläche
    center_x: float = Field(400, description="Mittelpunkt x")
    center_y: float = Field(400, description="Mittelpunkt y")
    # Abstand des Prüfungspunktes außerhalb des Kursbogens
    exam_offset: float = Field(12, ge=0,
        description="Radialer Versatz des Prüfungspunktes")
    # Ab diesem Winkelabstand (Grad) wird ein Führungsbogen zur Prüfung gezeichnet
    exam_guide_min_angle: float = Field(3, ge=0, le=180,
        description="Mindestabstand Kursende → Prüfung für Führungsbogen")
    # Radius der Monatsbeschriftung
    month_label_radius: float = Field(322, gt=0,
        description="Radius der Monatsbeschriftung")

    @model_validator(mode='after')
    def validate_radii(self):
        if self.max_radius < self.base_radius:
            raise ValueError(
                f"max_radius ({self.max_radius}) < base_radius ({self.base_radius})")
        return self


# ─── STUDIENJAHRE ───

class AcademicConfig(BaseModel):
    """Erlaubte Studienjahre und Basis des Fachsemester-Zählers."""
    # Jahre, für die Pläne angelegt werden dürfen
    allowed_years: list[int] = Field(default=[2025, 2026],
        description="Erlaubte Studienjahre")
    # Erlaubte Semester pro Jahr (fehlender Eintrag = beide)
    semesters_by_year: dict[int, list[Literal["winter", "summer"]]] = Field(
        default={2025: ["winter", "summer"], 2026: ["winter", "summer"]},
        description="Erlaubte Semester je Studienjahr")
    # Standardjahr für neue Pläne
    planning_year: int = Field(2026, description="Standard-Planungsjahr")
    # Semester, das als "Sem 1" zählt
    program_base_year: int = Field(2025, description="Jahr des Studienbeginns")
    program_base_semester: Literal["winter", "summer"] = Field("summer",
        description="Semester des Studienbeginns")

    @model_validator(mode='after')
    def validate_years(self):
        if not self.allowed_years:
            raise ValueError("allowed_years darf nicht leer sein")
        if self.planning_year not in self.allowed_years:
            raise ValueError(
                f"planning_year {self.planning_year} nicht in allowed_years "
                f"{self.allowed_years}")
        return self


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Semester-Planers."""
    # Anzeigename
    planner_name: str = Field("Semester-Radial-Planer",
        description="Name des Planers")
    # Sprache der Regel-Checkliste
    language: Literal["en", "de"] = Field("de",
        description="Sprache der Checkliste (en/de)")
    # Pfad zum JSON-Datensatz
    data_path: str = Field("output/planner_data.json",
        description="Pfad zum JSON-Datensatz")
    # Aktiver Plan (None = zuletzt geänderter)
    active_plan_id: Optional[str] = None
    # Aktive Studiengangs-Regel (None = erste aktive Regel)
    active_program_rule_id: Optional[str] = None
    # Radialkalender
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    # Studienjahre
    academic: AcademicConfig = Field(default_factory=AcademicConfig)
