"""PlannerData: Vollständiger Planer-Datensatz + Referenz-Check (Pydantic v2)."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from models.course import CourseDefinition
from models.offering import CourseOffering
from models.plan import UserPlan
from models.program_rule import MastersProgramRule

logger = logging.getLogger(__name__)


class PlannerDataError(Exception):
    """Fehler beim Laden eines Planer-Datensatzes."""


class ReferenceReport(BaseModel):
    """Ergebnis des Referenz-Checks."""

    is_consistent: bool
    errors: list[str]      # Verweise ins Leere
    warnings: list[str]    # Auffälligkeiten (z.B. archivierte Module im Plan)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_consistent:
            status = "[bold green]✓ KONSISTENT[/bold green]"
        else:
            status = "[bold red]✗ INKONSISTENT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Referenz-Check", border_style="cyan"))


class PlannerData(BaseModel):
    """Kursdefinitionen, Angebote, Pläne und Studiengangs-Regeln."""

    course_definitions: list[CourseDefinition] = []
    course_offerings: list[CourseOffering] = []
    user_plans: list[UserPlan] = []
    program_rules: list[MastersProgramRule] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Lookups ───

    def definition_by_id(self, definition_id: str) -> Optional[CourseDefinition]:
        return next((d for d in self.course_definitions if d.id == definition_id), None)

    def offering_by_id(self, offering_id: str) -> Optional[CourseOffering]:
        return next((o for o in self.course_offerings if o.id == offering_id), None)

    def plan_by_id(self, plan_id: str) -> Optional[UserPlan]:
        return next((p for p in self.user_plans if p.id == plan_id), None)

    def rule_by_id(self, rule_id: str) -> Optional[MastersProgramRule]:
        return next((r for r in self.program_rules if r.id == rule_id), None)

    def active_rule(self) -> Optional[MastersProgramRule]:
        """Erste aktive Regel, sonst die erste überhaupt."""
        for rule in self.program_rules:
            if rule.is_active:
                return rule
        return self.program_rules[0] if self.program_rules else None

    def rule_for_plan(self, plan: UserPlan) -> Optional[MastersProgramRule]:
        return self.rule_by_id(plan.program_rule_id) or self.active_rule()

    def plan_offerings(self, plan: UserPlan) -> list[CourseOffering]:
        """Angebote im Studienjahr + Semester des Plans."""
        return [
            o for o in self.course_offerings
            if o.academic_year == plan.academic_year
            and o.semester_type == plan.semester_type
        ]

    def replace_plan(self, plan: UserPlan) -> "PlannerData":
        """Ersetzt (oder ergänzt) einen Plan, neueste Pläne zuerst."""
        plans = [p for p in self.user_plans if p.id != plan.id] + [plan]
        plans.sort(key=lambda p: p.updated_at, reverse=True)
        return self.model_copy(update={"user_plans": plans})

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        archived = sum(1 for d in self.course_definitions if d.is_archived)
        active = self.active_rule()
        lines = [
            f"Kursdefinitionen: {len(self.course_definitions)} ({archived} archiviert)",
            f"Angebote: {len(self.course_offerings)}",
            f"Pläne: {len(self.user_plans)}",
            f"Studiengangs-Regeln: {len(self.program_rules)}",
            f"Aktive Regel: {active.program_name} ({active.version})" if active else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Referenz-Check ───

    def validate_references(self) -> ReferenceReport:
        """Prüft Querverweise zwischen Angeboten, Definitionen, Plänen und Regeln.

        Die Regelprüfung selbst überspringt fehlende Verweise stillschweigend;
        dieser Check macht sie sichtbar.
        """
        errors: list[str] = []
        warnings: list[str] = []

        definition_ids = {d.id for d in self.course_definitions}
        offering_map = {o.id: o for o in self.course_offerings}
        rule_ids = {r.id for r in self.program_rules}

        for offering in self.course_offerings:
            if offering.course_definition_id not in definition_ids:
                errors.append(
                    f"Angebot {offering.id}: Kursdefinition "
                    f"'{offering.course_definition_id}' fehlt."
                )
            option_ids = {o.id for o in offering.exam_options}
            if len(option_ids) != len(offering.exam_options):
                warnings.append(f"Angebot {offering.id}: doppelte Prüfungsoptionen.")

        for rule in self.program_rules:
            for def_id in rule.mandatory_course_definition_ids:
                if def_id not in definition_ids:
                    errors.append(
                        f"Regel {rule.id}: Pflichtmodul '{def_id}' existiert nicht."
                    )

        for plan in self.user_plans:
            if plan.program_rule_id and plan.program_rule_id not in rule_ids:
                errors.append(
                    f"Plan {plan.id}: Regel '{plan.program_rule_id}' existiert nicht."
                )
            for sel in plan.selected_offerings:
                offering = offering_map.get(sel.offering_id)
                if offering is None:
                    errors.append(
                        f"Plan {plan.id}: Angebot '{sel.offering_id}' existiert nicht."
                    )
                    continue
                if sel.selected_exam_option_id and offering.exam_option(
                    sel.selected_exam_option_id
                ) is None:
                    warnings.append(
                        f"Plan {plan.id}: Prüfungsoption '{sel.selected_exam_option_id}' "
                        f"gehört nicht zu Angebot {offering.id}."
                    )
                definition = self.definition_by_id(offering.course_definition_id)
                if sel.is_included and definition is not None and definition.is_archived:
                    warnings.append(
                        f"Plan {plan.id}: archiviertes Modul {definition.short_code} enthalten."
                    )

        if not self.program_rules:
            warnings.append("Keine Studiengangs-Regel definiert.")

        return ReferenceReport(
            is_consistent=not errors, errors=errors, warnings=warnings
        )

    # ─── JSON ───

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))
        logger.info(f"Datensatz gespeichert: {path}")

    @classmethod
    def load_json(cls, path: Path) -> "PlannerData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
        try:
            data = cls.model_validate_json(raw)
        except ValidationError as e:
            raise PlannerDataError(
                f"Datensatz ungültig: {path}\nPydantic-Fehler: {e}"
            ) from e
        logger.info(
            f"Datensatz geladen: {path} ({len(data.course_offerings)} Angebote, "
            f"{len(data.user_plans)} Pläne)"
        )
        return data
