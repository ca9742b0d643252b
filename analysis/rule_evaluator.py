"""Regelprüfung: Auswahl eines Plans gegen eine Studiengangs-Regel.

Reine Funktion ohne Seiteneffekte. Nicht auflösbare Verweise (Angebot oder
Kursdefinition fehlt) werden übersprungen, nie als Fehler gemeldet.

Reihenfolge der Checklisten-Zeilen:
  1. mandatory        – alle Pflichtmodule (laut Regel-ID-Liste) enthalten
  2. total-credits    – Gesamt-LP ≥ Vorgabe
  3. category-<CAT>   – je Kategorie-Vorgabe, nur über Wahlpflicht-Module
  4. elective-min     – Wahlpflicht-LP ≥ Minimum
  5. seminar          – Anzahl Seminare ≥ Minimum
  6. praktikum        – Anzahl "praktikum"-getaggter Module ≥ Minimum
  7. thesis           – Masterarbeit enthalten (falls gefordert)
"""

import logging

from models.course import CourseDefinition
from models.offering import CourseOffering
from models.plan import SelectedOffering
from models.program_rule import (
    CategoryRequirement,
    MastersProgramRule,
    RequirementRow,
    RuleEvaluationResult,
)
from analysis.rule_texts import format_text, texts_for

logger = logging.getLogger(__name__)

PRAKTIKUM_TAG = "praktikum"
THESIS_TAG = "thesis"


def resolve_included_definitions(
    selections: list[SelectedOffering],
    offerings: list[CourseOffering],
    definitions: list[CourseDefinition],
) -> list[CourseDefinition]:
    """Kursdefinitionen aller enthaltenen Auswahlen (in Auswahl-Reihenfolge)."""
    offering_by_id = {o.id: o for o in offerings}
    definition_by_id = {d.id: d for d in definitions}

    resolved: list[CourseDefinition] = []
    for selection in selections:
        if not selection.is_included:
            continue
        offering = offering_by_id.get(selection.offering_id)
        if offering is None:
            logger.debug(f"Regelprüfung: Angebot {selection.offering_id} unbekannt, übersprungen")
            continue
        definition = definition_by_id.get(offering.course_definition_id)
        if definition is None:
            logger.debug(
                f"Regelprüfung: Kursdefinition {offering.course_definition_id} "
                f"unbekannt, übersprungen"
            )
            continue
        resolved.append(definition)
    return resolved


def _sum_credits(definitions: list[CourseDefinition]) -> float:
    return sum(d.credits for d in definitions)


def _category_row(
    requirement: CategoryRequirement,
    electives: list[CourseDefinition],
    text: dict[str, str],
) -> RequirementRow:
    category_credits = _sum_credits(
        [d for d in electives if d.category == requirement.category]
    )
    min_valid = category_credits >= requirement.min_credits
    max_valid = (
        requirement.max_credits is None
        or category_credits <= requirement.max_credits
    )

    details = None
    if not min_valid:
        details = format_text(
            text["lp_short"], count=requirement.min_credits - category_credits
        )
    elif not max_valid:
        details = format_text(
            text["lp_above_max"], count=category_credits - requirement.max_credits
        )

    label = requirement.label or format_text(
        text["category_min_label"],
        category=requirement.category.value,
        min=requirement.min_credits,
    )
    return RequirementRow(
        id=f"category-{requirement.category.value}",
        label=label,
        met=min_valid and max_valid,
        details=details,
    )


def _threshold_row(
    row_id: str, label: str, actual: float, required: float, missing_template: str
) -> RequirementRow:
    met = actual >= required
    return RequirementRow(
        id=row_id,
        label=label,
        met=met,
        details=None if met else format_text(missing_template, count=required - actual),
    )


def evaluate_program_rule(
    rule: MastersProgramRule,
    selections: list[SelectedOffering],
    offerings: list[CourseOffering],
    definitions: list[CourseDefinition],
    language: str = "en",
) -> RuleEvaluationResult:
    """Berechnet LP-Summen und die Checkliste einer Regel für eine Auswahl.

    Pflicht/Wahlpflicht wird über die ID-Liste der Regel getrennt, nicht
    über CourseDefinition.is_mandatory. Kategorie-Vorgaben zählen nur
    Wahlpflicht-Module.

    Args:
        rule: Zu prüfende Studiengangs-Regel.
        selections: Auswahlliste des Plans (nur is_included zählt).
        offerings: Angebote zum Auflösen der Auswahl.
        definitions: Kursdefinitionen zum Auflösen der Angebote.
        language: "en" oder "de" für Beschriftungen und Details.

    Returns:
        RuleEvaluationResult mit Zeilen in fester Reihenfolge.
    """
    text = texts_for(language)
    included = resolve_included_definitions(selections, offerings, definitions)

    applicable_credits = _sum_credits(included)

    mandatory_set = set(rule.mandatory_course_definition_ids)
    included_mandatory = {d.id for d in included if d.id in mandatory_set}
    electives = [d for d in included if d.id not in mandatory_set]
    elective_credits = _sum_credits(electives)

    seminar_count = sum(1 for d in included if d.is_seminar)
    praktikum_count = sum(1 for d in included if d.has_tag(PRAKTIKUM_TAG))
    thesis_included = any(d.has_tag(THESIS_TAG) for d in included)

    mandatory_met = len(included_mandatory) == len(mandatory_set)
    rows = [
        RequirementRow(
            id="mandatory",
            label=text["mandatory_label"],
            met=mandatory_met,
            details=None if mandatory_met else format_text(
                text["mandatory_missing"],
                count=len(mandatory_set) - len(included_mandatory),
            ),
        ),
        _threshold_row(
            "total-credits",
            format_text(text["total_credits_label"], count=rule.total_credits_required),
            applicable_credits,
            rule.total_credits_required,
            text["lp_short"],
        ),
    ]
    rows.extend(
        _category_row(req, electives, text) for req in rule.category_requirements
    )

    thesis_met = not rule.thesis_required or thesis_included
    rows.extend([
        _threshold_row(
            "elective-min",
            format_text(text["elective_min_label"], count=rule.elective_credits_min),
            elective_credits,
            rule.elective_credits_min,
            text["elective_short"],
        ),
        _threshold_row(
            "seminar",
            format_text(text["seminar_label"], count=rule.seminar_min_count),
            seminar_count,
            rule.seminar_min_count,
            text["seminar_missing"],
        ),
        _threshold_row(
            "praktikum",
            format_text(text["praktikum_label"], count=rule.praktikum_min_count),
            praktikum_count,
            rule.praktikum_min_count,
            text["praktikum_missing"],
        ),
        RequirementRow(
            id="thesis",
            label=text["thesis_label"],
            met=thesis_met,
            details=None if thesis_met else text["thesis_missing"],
        ),
    ])

    return RuleEvaluationResult(
        applicable_credits=applicable_credits,
        met_requirements=sum(1 for r in rows if r.met),
        total_requirements=len(rows),
        rows=rows,
    )
