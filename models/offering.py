"""Datenmodell für ein Kursangebot in einem Semester (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SemesterType(str, Enum):
    WINTER = "winter"
    SUMMER = "summer"


class ExamType(str, Enum):
    WRITTEN = "written"
    ORAL = "oral"
    PROJECT = "project"


class ExamOption(BaseModel):
    """Eine wählbare Prüfungsvariante eines Angebots."""

    id: str = Field(min_length=1)
    type: ExamType
    date: str = Field(min_length=1)           # ISO-Datum der Prüfung
    reexam_date: Optional[str] = None         # Wiederholungstermin
    location: Optional[str] = None
    is_default: bool = False


class LectureSession(BaseModel):
    """Ein einzelner Vorlesungstermin."""

    id: str = ""                              # leer = aus Angebot + Datum erzeugt
    date: str = Field(min_length=1)
    start_time: Optional[str] = None          # "10:15"
    end_time: Optional[str] = None

    def time_range(self) -> Optional[str]:
        """z.B. "10:15 - 11:45"; nur Start- oder Endzeit, sonst None."""
        if self.start_time and self.end_time:
            return f"{self.start_time} - {self.end_time}"
        return self.start_time or self.end_time or None


class CourseOffering(BaseModel):
    """Einplanung einer Kursdefinition in ein Studienjahr + Semester.

    Start- und Enddatum bleiben Text: ungültige Daten sollen erst in der
    Geometrie-Schicht (Lane-Zuweisung) auf ein Null-Intervall abfallen,
    statt den ganzen Datensatz beim Laden zu verwerfen.
    """

    id: str = Field(min_length=1)
    course_definition_id: str = Field(min_length=1)
    academic_year: int
    semester_type: SemesterType
    is_available: bool = True
    start_date: str
    end_date: str
    exam_options: list[ExamOption] = []
    lecture_sessions: Optional[list[LectureSession]] = None
    lecture_dates: Optional[list[str]] = None   # Kurzform ohne Uhrzeiten
    midterm_date: Optional[str] = None
    notes: Optional[str] = None
    professor_ids: Optional[list[str]] = None

    def default_exam_option(self) -> Optional[ExamOption]:
        """Standard-Prüfungsoption, sonst die erste, sonst None."""
        for option in self.exam_options:
            if option.is_default:
                return option
        return self.exam_options[0] if self.exam_options else None

    def exam_option(self, option_id: str) -> Optional[ExamOption]:
        return next((o for o in self.exam_options if o.id == option_id), None)

    def get_lecture_sessions(self) -> list[LectureSession]:
        """Explizite Vorlesungstermine (Sessions vor reinen Daten).

        Sessions ohne ID erhalten "<angebot>-lecture-<YYYYMMDD>". Eine leere
        Liste bedeutet: Termine werden wöchentlich ab start_date abgeleitet.
        """
        def _fallback_id(date: str, index: int) -> str:
            digits = "".join(ch for ch in date if ch.isdigit())
            return f"{self.id}-lecture-{digits or index}"

        if self.lecture_sessions:
            return [
                s if s.id else s.model_copy(update={"id": _fallback_id(s.date, i)})
                for i, s in enumerate(self.lecture_sessions)
            ]
        if self.lecture_dates:
            return [
                LectureSession(id=_fallback_id(d, i), date=d)
                for i, d in enumerate(self.lecture_dates) if d
            ]
        return []
