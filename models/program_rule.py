"""Datenmodell für Studiengangs-Regeln (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from models.course import CourseCategory


class CategoryRequirement(BaseModel):
    """LP-Vorgabe für eine Kategorie (nur Wahlpflicht zählt)."""

    category: CourseCategory
    min_credits: float = Field(0, ge=0)
    max_credits: Optional[float] = Field(None, ge=0)
    label: Optional[str] = None               # überschreibt den generierten Text

    @model_validator(mode='after')
    def _check_bounds(self):
        if self.max_credits is not None and self.max_credits < self.min_credits:
            raise ValueError(
                f"Kategorie {self.category.value}: max_credits ({self.max_credits}) "
                f"< min_credits ({self.min_credits})"
            )
        return self


class MastersProgramRule(BaseModel):
    """Prüfungsordnung eines Masterstudiengangs."""

    id: str = Field(min_length=1)
    program_name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    total_credits_required: float = Field(ge=1)
    mandatory_course_definition_ids: list[str] = []
    category_requirements: list[CategoryRequirement] = []
    seminar_min_count: int = Field(0, ge=0)
    praktikum_min_count: int = Field(0, ge=0)
    thesis_required: bool = False
    elective_credits_min: float = Field(0, ge=0)
    is_active: bool = False
    notes: Optional[str] = None


class RequirementRow(BaseModel):
    """Eine Zeile der Regel-Checkliste."""

    id: str          # "mandatory", "total-credits", "category-SE", ...
    label: str
    met: bool
    details: Optional[str] = None  # nur bei Defizit (oder Max-Überschreitung)


class RuleEvaluationResult(BaseModel):
    """Abgeleitetes Ergebnis der Regelprüfung (wird nie gespeichert)."""

    applicable_credits: float
    met_requirements: int
    total_requirements: int
    rows: list[RequirementRow]

    @property
    def all_met(self) -> bool:
        return self.met_requirements == self.total_requirements

    def row(self, row_id: str) -> Optional[RequirementRow]:
        return next((r for r in self.rows if r.id == row_id), None)
