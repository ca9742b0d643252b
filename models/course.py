"""Datenmodell für eine Kursdefinition (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CourseCategory(str, Enum):
    FM = "FM"
    SE = "SE"
    HCI = "HCI"
    DB = "DB"
    DS = "DS"
    SS = "SS"


CATEGORY_LABELS: dict[CourseCategory, str] = {
    CourseCategory.FM: "Formal Methods",
    CourseCategory.SE: "Software Engineering",
    CourseCategory.HCI: "Human-Computer Interaction",
    CourseCategory.DB: "Databases",
    CourseCategory.DS: "Distributed Systems",
    CourseCategory.SS: "Softskills",
}


class CourseDefinition(BaseModel):
    """Katalogeintrag eines Moduls, unabhängig vom Semester."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    short_code: str = Field(min_length=1)     # z.B. "SE2"
    category: Optional[CourseCategory] = None
    is_mandatory: bool = False
    is_seminar: bool = False
    credits: float = Field(0, ge=0)           # Leistungspunkte (LP)
    university_id: Optional[str] = None
    professor_ids: list[str] = []
    color: str = "#95A5A6"
    description: Optional[str] = None
    is_archived: bool = False
    tags: Optional[list[str]] = None          # "praktikum", "thesis", ...

    def has_tag(self, tag: str) -> bool:
        """True wenn ein Tag (Groß/Klein egal) exakt übereinstimmt."""
        wanted = tag.lower()
        return any(t.lower() == wanted for t in self.tags or [])
