"""Demo-Daten-Generator für den Semester-Planer.

Erzeugt einen reproduzierbaren Datensatz (gleicher Seed → gleiche Daten):

  - 18 Kursdefinitionen über alle sechs Kategorien, davon
    3 Pflichtmodule, 3 Seminare (mit Blockterminen), 2 Praktika und die
    Masterarbeit
  - Angebote für jedes erlaubte Studienjahr in Sommer- und Wintersemester
    mit ein bis zwei Prüfungsoptionen
  - eine aktive Studiengangs-Regel (120 LP)
  - einen Beispielplan im Planungsjahr mit den Pflichtmodulen
"""

import logging
import random
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich import box

from config.schema import PlannerConfig
from models.course import CourseCategory, CourseDefinition
from models.offering import (
    CourseOffering, ExamOption, ExamType, LectureSession, SemesterType,
)
from models.plan import create_plan
from models.planner_data import PlannerData
from models.program_rule import CategoryRequirement, MastersProgramRule

logger = logging.getLogger(__name__)

CATEGORY_COLORS: dict[CourseCategory, str] = {
    CourseCategory.FM: "#F5A623",
    CourseCategory.SE: "#4A90D9",
    CourseCategory.HCI: "#E91E8C",
    CourseCategory.DB: "#9B59B6",
    CourseCategory.DS: "#27AE60",
    CourseCategory.SS: "#95A5A6",
}

# (id, Name, Kürzel, Kategorie, LP, Pflicht, Seminar, Tags)
_DEMO_COURSES: list[tuple] = [
    ("fm-logic", "Logik für Informatiker", "LOG", CourseCategory.FM, 6, True, False, None),
    ("fm-verif", "Programmverifikation", "VER", CourseCategory.FM, 6, False, False, None),
    ("fm-sem", "Seminar Formale Methoden", "SFM", CourseCategory.FM, 4, False, True, None),
    ("se-arch", "Softwarearchitektur", "SWA", CourseCategory.SE, 6, True, False, None),
    ("se-test", "Softwaretests", "SWT", CourseCategory.SE, 6, False, False, None),
    ("se-prak", "Praktikum Software Engineering", "PSE", CourseCategory.SE, 9, False, False,
     ["praktikum"]),
    ("hci-ux", "User Experience Design", "UXD", CourseCategory.HCI, 6, False, False, None),
    ("hci-sem", "Seminar Mensch-Maschine-Interaktion", "SMI", CourseCategory.HCI, 4, False, True,
     None),
    ("db-impl", "Implementierung von Datenbanken", "IDB", CourseCategory.DB, 6, False, False, None),
    ("db-dist", "Verteilte Datenbanken", "VDB", CourseCategory.DB, 6, False, False, None),
    ("ds-cloud", "Cloud Computing", "CLC", CourseCategory.DS, 6, False, False, None),
    ("ds-cons", "Konsensprotokolle", "KON", CourseCategory.DS, 6, False, False, None),
    ("ds-prak", "Praktikum Verteilte Systeme", "PVS", CourseCategory.DS, 9, False, False,
     ["Praktikum"]),
    ("ds-sem", "Seminar Verteilte Systeme", "SVS", CourseCategory.DS, 4, False, True, None),
    ("ss-write", "Wissenschaftliches Schreiben", "WSS", CourseCategory.SS, 3, True, False, None),
    ("ss-pm", "Projektmanagement", "PMG", CourseCategory.SS, 3, False, False, None),
    ("ss-pres", "Präsentationstechniken", "PRT", CourseCategory.SS, 2, False, False, None),
    ("thesis", "Masterarbeit", "MA", None, 30, False, False, ["thesis"]),
]

# Vorlesungszeit je Semester (Monat, Tag); Winter endet im Folgejahr
_SEMESTER_WINDOWS: dict[SemesterType, tuple[tuple[int, int], tuple[int, int]]] = {
    SemesterType.SUMMER: ((4, 14), (7, 25)),
    SemesterType.WINTER: ((10, 13), (2, 6)),
}


class DemoDataGenerator:
    """Erzeugt einen vollständigen, in sich konsistenten Demo-Datensatz."""

    def __init__(self, config: PlannerConfig, seed: int = 42,
                 now: Optional[datetime] = None):
        self.config = config
        self.rng = random.Random(seed)
        self.now = now or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def generate(self) -> PlannerData:
        definitions = self._definitions()
        offerings = self._offerings(definitions)
        rule = self._program_rule(definitions)

        academic = self.config.academic
        plan = create_plan(
            "Beispielplan",
            academic.planning_year,
            SemesterType.SUMMER,
            offerings,
            program_rule_id=rule.id,
            plan_id="plan-demo",
            now=self.now,
            academic=academic,
        )
        # Pflichtmodule sind im Beispielplan bereits enthalten
        mandatory_ids = {d.id for d in definitions if d.is_mandatory}
        for offering in offerings:
            if (offering.course_definition_id in mandatory_ids
                    and plan.selection(offering.id) is not None):
                plan = plan.upsert_selection(
                    offering.id, is_included=True, now=self.now.isoformat()
                )

        data = PlannerData(
            course_definitions=definitions,
            course_offerings=offerings,
            user_plans=[plan],
            program_rules=[rule],
        )
        logger.info(
            f"Demo-Daten: {len(definitions)} Definitionen, {len(offerings)} Angebote"
        )
        return data

    # ─── Bausteine ───

    def _definitions(self) -> list[CourseDefinition]:
        result = []
        for (def_id, name, code, category, credits, mandatory,
             seminar, tags) in _DEMO_COURSES:
            result.append(CourseDefinition(
                id=def_id,
                name=name,
                short_code=code,
                category=category,
                credits=credits,
                is_mandatory=mandatory,
                is_seminar=seminar,
                color=CATEGORY_COLORS.get(category, "#34495E"),
                tags=tags,
            ))
        return result

    def _semester_window(self, year: int, semester: SemesterType) -> tuple[date, date]:
        (sm, sd), (em, ed) = _SEMESTER_WINDOWS[semester]
        end_year = year + 1 if semester == SemesterType.WINTER else year
        return date(year, sm, sd), date(end_year, em, ed)

    def _offerings(self, definitions: list[CourseDefinition]) -> list[CourseOffering]:
        offerings: list[CourseOffering] = []
        for year in self.config.academic.allowed_years:
            for semester in (SemesterType.SUMMER, SemesterType.WINTER):
                window_start, window_end = self._semester_window(year, semester)
                span = (window_end - window_start).days
                for definition in definitions:
                    # Nicht jedes Modul wird in jedem Semester angeboten
                    if not definition.is_mandatory and self.rng.random() < 0.25:
                        continue
                    offerings.append(self._offering(
                        definition, year, semester, window_start, span,
                    ))
        return offerings

    def _offering(self, definition: CourseDefinition, year: int,
                  semester: SemesterType, window_start: date,
                  span: int) -> CourseOffering:
        start_offset = self.rng.randint(0, span // 3)
        length = self.rng.randint(span // 3, span - start_offset)
        start = window_start + timedelta(days=start_offset)
        end = start + timedelta(days=length)
        offering_id = f"{definition.id}-{year}-{semester.value}"

        exam_types = [ExamType.WRITTEN, ExamType.ORAL, ExamType.PROJECT]
        options = []
        for idx in range(self.rng.randint(1, 2)):
            exam_date = end + timedelta(days=7 + 14 * idx + self.rng.randint(0, 6))
            options.append(ExamOption(
                id=f"{offering_id}-exam-{idx + 1}",
                type=self.rng.choice(exam_types),
                date=exam_date.isoformat(),
                reexam_date=(exam_date + timedelta(days=60)).isoformat(),
                is_default=idx == 0,
            ))

        midterm = None
        if length > 60 and self.rng.random() < 0.3:
            midterm = (start + timedelta(days=length // 2)).isoformat()

        # Seminare als Blocktermine, alle anderen wöchentlich ab Vorlesungsbeginn
        sessions = None
        if definition.is_seminar:
            sessions = [
                LectureSession(
                    id=f"block-{n + 1}",
                    date=(start + timedelta(days=14 * n)).isoformat(),
                    start_time="10:15", end_time="13:45",
                )
                for n in range(4)
                if start + timedelta(days=14 * n) <= end
            ]

        return CourseOffering(
            id=offering_id,
            course_definition_id=definition.id,
            academic_year=year,
            semester_type=semester,
            is_available=True,
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            exam_options=options,
            midterm_date=midterm,
            lecture_sessions=sessions,
        )

    def _program_rule(self, definitions: list[CourseDefinition]) -> MastersProgramRule:
        return MastersProgramRule(
            id="msc-informatik-2025",
            program_name="M.Sc. Informatik",
            version="PO 2025",
            total_credits_required=120,
            mandatory_course_definition_ids=[d.id for d in definitions if d.is_mandatory],
            category_requirements=[
                CategoryRequirement(category=CourseCategory.FM, min_credits=6),
                CategoryRequirement(category=CourseCategory.SE, min_credits=12,
                                    max_credits=30),
                CategoryRequirement(category=CourseCategory.DS, min_credits=12),
                CategoryRequirement(category=CourseCategory.SS, min_credits=2,
                                    max_credits=6),
            ],
            seminar_min_count=2,
            praktikum_min_count=1,
            thesis_required=True,
            elective_credits_min=60,
            is_active=True,
        )

    # ─── Ausgabe ───

    def print_summary(self, data: PlannerData) -> None:
        """Gibt eine Übersicht der erzeugten Angebote pro Semester aus."""
        console = Console()
        table = Table(title="Demo-Angebote", box=box.ROUNDED)
        table.add_column("Studienjahr")
        table.add_column("Semester")
        table.add_column("Angebote", justify="right")
        table.add_column("LP gesamt", justify="right")

        counts: dict[tuple[int, str], list[float]] = {}
        for offering in data.course_offerings:
            definition = data.definition_by_id(offering.course_definition_id)
            key = (offering.academic_year, offering.semester_type.value)
            counts.setdefault(key, []).append(definition.credits if definition else 0)
        for (year, semester), credits in sorted(counts.items()):
            table.add_row(str(year), semester, str(len(credits)), f"{sum(credits):g}")
        console.print(table)
