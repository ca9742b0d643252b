"""Studienjahre und Fachsemester.

Erlaubte Jahre und das Basis-Semester des Studiengangs kommen aus der
AcademicConfig; ohne Angabe gelten die Default-Werte.
"""

import math
from typing import Optional

from config.schema import AcademicConfig
from models.offering import SemesterType


def _semester_order(semester: "SemesterType | str") -> int:
    # Sommer vor Winter innerhalb eines Studienjahres
    return 0 if SemesterType(semester) == SemesterType.SUMMER else 1


def normalize_academic_year(year: int, academic: Optional[AcademicConfig] = None) -> int:
    """Klemmt ein Jahr auf den erlaubten Bereich (erstes/letztes erlaubtes Jahr)."""
    allowed = sorted((academic or AcademicConfig()).allowed_years)
    if year in allowed:
        return year
    if year <= allowed[0]:
        return allowed[0]
    return allowed[-1]


def allowed_semesters_for_year(
    year: int, academic: Optional[AcademicConfig] = None
) -> list[SemesterType]:
    academic = academic or AcademicConfig()
    normalized = normalize_academic_year(year, academic)
    names = academic.semesters_by_year.get(normalized) or ["winter", "summer"]
    return [SemesterType(n) for n in names]


def normalize_semester_for_year(
    year: int, semester: SemesterType, academic: Optional[AcademicConfig] = None
) -> SemesterType:
    allowed = allowed_semesters_for_year(year, academic)
    semester = SemesterType(semester)
    return semester if semester in allowed else allowed[0]


def derive_program_semester(
    academic_year: int, semester: SemesterType,
    academic: Optional[AcademicConfig] = None,
) -> int:
    """Fachsemester relativ zum Studienbeginn (Basis-Semester = Sem 1, min. 1)."""
    academic = academic or AcademicConfig()
    base = academic.program_base_year * 2 + _semester_order(academic.program_base_semester)
    current = academic_year * 2 + _semester_order(semester)
    return max(1, current - base + 1)


def resolve_program_semester(
    explicit: Optional[float], academic_year: int, semester: SemesterType,
    academic: Optional[AcademicConfig] = None,
) -> int:
    """Explizite Angabe (abgerundet, min. 1) hat Vorrang vor der Ableitung."""
    if explicit is not None and math.isfinite(explicit):
        return max(1, math.floor(explicit))
    return derive_program_semester(academic_year, semester, academic)


def format_program_semester(value: int) -> str:
    return f"Sem {value}"


def format_program_semester_with_year(
    explicit: Optional[float], academic_year: int, semester: SemesterType,
    academic: Optional[AcademicConfig] = None,
) -> str:
    value = resolve_program_semester(explicit, academic_year, semester, academic)
    return f"{format_program_semester(value)} {academic_year}"
