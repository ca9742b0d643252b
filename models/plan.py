"""Datenmodell für einen Semesterplan + Auswahl-Operationen (Pydantic v2).

Alle Mutationen liefern einen neuen UserPlan (model_copy), der alte bleibt
unverändert.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from config.schema import AcademicConfig
from geometry.lanes import sort_for_lanes
from models.course import CourseDefinition
from models.offering import CourseOffering, SemesterType
from models.semester import normalize_academic_year, normalize_semester_for_year


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SelectedOffering(BaseModel):
    """Auswahl eines Angebots innerhalb eines Plans."""

    offering_id: str = Field(min_length=1)
    selected_exam_option_id: str = ""
    is_included: bool = False
    display_order: int = Field(0, ge=0)   # Reihenfolge/Lane unter den enthaltenen


class UserPlan(BaseModel):
    """Semesterplan eines Nutzers."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    academic_year: int
    semester_type: SemesterType
    program_rule_id: str = ""
    selected_offerings: list[SelectedOffering] = []
    created_at: str = Field(default_factory=_now_iso)
    updated_at: str = Field(default_factory=_now_iso)

    @model_validator(mode='after')
    def _check_unique_offerings(self):
        seen: set[str] = set()
        for sel in self.selected_offerings:
            if sel.offering_id in seen:
                raise ValueError(
                    f"Plan {self.id}: Angebot {sel.offering_id} mehrfach ausgewählt"
                )
            seen.add(sel.offering_id)
        return self

    # ─── Abfragen ───

    def selection(self, offering_id: str) -> Optional[SelectedOffering]:
        return next(
            (s for s in self.selected_offerings if s.offering_id == offering_id), None
        )

    def included_selections(self) -> list[SelectedOffering]:
        """Enthaltene Auswahlen, sortiert nach display_order."""
        return sorted(
            (s for s in self.selected_offerings if s.is_included),
            key=lambda s: s.display_order,
        )

    def next_included_display_order(self, ignore_offering_id: Optional[str] = None) -> int:
        """Nächste freie Position hinter allen enthaltenen Auswahlen (0 wenn leer)."""
        orders = [
            s.display_order for s in self.selected_offerings
            if s.is_included and s.offering_id != ignore_offering_id
        ]
        return max(orders) + 1 if orders else 0

    # ─── Mutationen ───

    def upsert_selection(
        self,
        offering_id: str,
        *,
        selected_exam_option_id: Optional[str] = None,
        is_included: Optional[bool] = None,
        display_order: Optional[int] = None,
        now: Optional[str] = None,
    ) -> "UserPlan":
        """Legt eine Auswahl an oder aktualisiert sie.

        Wird eine bisher nicht enthaltene Auswahl ohne explizite Position
        aufgenommen, rückt sie ans Ende der enthaltenen Auswahlen.
        """
        existing = self.selection(offering_id)
        if existing is not None:
            updates = {
                k: v for k, v in (
                    ("selected_exam_option_id", selected_exam_option_id),
                    ("is_included", is_included),
                    ("display_order", display_order),
                ) if v is not None
            }
            new_sel = existing.model_copy(update=updates)
        else:
            new_sel = SelectedOffering(
                offering_id=offering_id,
                selected_exam_option_id=selected_exam_option_id or "",
                is_included=bool(is_included),
                display_order=(
                    display_order if display_order is not None
                    else self.next_included_display_order()
                ),
            )

        was_included = existing.is_included if existing is not None else False
        if is_included is True and display_order is None and not was_included:
            new_sel = new_sel.model_copy(update={
                "display_order": self.next_included_display_order(offering_id),
            })

        selections = [
            s for s in self.selected_offerings if s.offering_id != offering_id
        ] + [new_sel]
        return self.model_copy(update={
            "selected_offerings": selections,
            "updated_at": now or _now_iso(),
        })

    def toggle_offering(self, offering_id: str, now: Optional[str] = None) -> "UserPlan":
        """Schaltet is_included für ein Angebot um."""
        existing = self.selection(offering_id)
        included = existing.is_included if existing is not None else False
        return self.upsert_selection(offering_id, is_included=not included, now=now)


# ─── Plan-Erzeugung ───────────────────────────────────────────────────────────

def offerings_for_period(
    offerings: list[CourseOffering], year: int, semester: SemesterType
) -> list[CourseOffering]:
    """Angebote eines Semesters in Lane-Reihenfolge (Startdatum, dann ID)."""
    return sort_for_lanes(
        o for o in offerings
        if o.academic_year == year and o.semester_type == semester
    )


def create_plan(
    name: str,
    year: int,
    semester: SemesterType,
    offerings: list[CourseOffering],
    program_rule_id: str = "",
    plan_id: Optional[str] = None,
    now: Optional[datetime] = None,
    academic: Optional[AcademicConfig] = None,
) -> UserPlan:
    """Erzeugt einen neuen Plan mit allen Angeboten des Semesters (nicht enthalten)."""
    now = now or datetime.now(timezone.utc)
    year = normalize_academic_year(year, academic)
    semester = normalize_semester_for_year(year, semester, academic)

    selections = []
    for index, offering in enumerate(offerings_for_period(offerings, year, semester)):
        option = offering.default_exam_option()
        selections.append(SelectedOffering(
            offering_id=offering.id,
            selected_exam_option_id=option.id if option else "",
            is_included=False,
            display_order=index,
        ))

    stamp = now.isoformat()
    return UserPlan(
        id=plan_id or f"plan-{int(now.timestamp() * 1000)}",
        name=name,
        academic_year=year,
        semester_type=semester,
        program_rule_id=program_rule_id,
        selected_offerings=selections,
        created_at=stamp,
        updated_at=stamp,
    )


def sync_mandatory(
    plan: UserPlan,
    offerings: list[CourseOffering],
    definitions: list[CourseDefinition],
    now: Optional[str] = None,
) -> UserPlan:
    """Ergänzt fehlende Auswahlen für die Angebote des Plansemesters.

    Neue Auswahlen sind genau dann enthalten, wenn die Definition als
    Pflichtmodul markiert ist; enthaltene rücken ans Ende der enthaltenen
    Auswahlen. Bestehende Auswahlen bleiben unverändert.
    """
    definition_by_id = {d.id: d for d in definitions}
    period = offerings_for_period(offerings, plan.academic_year, plan.semester_type)
    for offering in period:
        if plan.selection(offering.id) is not None:
            continue
        definition = definition_by_id.get(offering.course_definition_id)
        option = offering.default_exam_option()
        plan = plan.upsert_selection(
            offering.id,
            selected_exam_option_id=option.id if option else "",
            is_included=definition.is_mandatory if definition else False,
            now=now,
        )
    return plan
