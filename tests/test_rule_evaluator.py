"""Tests für die Regelprüfung (analysis/rule_evaluator.py)."""

import copy
from typing import Optional

import pytest

from analysis.rule_evaluator import evaluate_program_rule, resolve_included_definitions
from analysis.rule_texts import format_number, format_text, texts_for
from models.course import CourseCategory, CourseDefinition
from models.offering import CourseOffering, SemesterType
from models.plan import SelectedOffering
from models.program_rule import CategoryRequirement, MastersProgramRule


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def _definition(def_id: str, category: Optional[CourseCategory] = CourseCategory.SE,
                credits: float = 6, mandatory: bool = False, seminar: bool = False,
                tags: Optional[list[str]] = None) -> CourseDefinition:
    return CourseDefinition(
        id=def_id, name=def_id.upper(), short_code=def_id[:3].upper(),
        category=category, credits=credits, is_mandatory=mandatory,
        is_seminar=seminar, tags=tags,
    )


def _offering(def_id: str) -> CourseOffering:
    return CourseOffering(
        id=f"off-{def_id}", course_definition_id=def_id,
        academic_year=2026, semester_type=SemesterType.SUMMER,
        start_date="2026-04-14", end_date="2026-07-25",
    )


def _sel(def_id: str, included: bool = True) -> SelectedOffering:
    return SelectedOffering(offering_id=f"off-{def_id}", is_included=included)


def _rule(**kwargs) -> MastersProgramRule:
    params = dict(
        id="r1", program_name="M.Sc. Test", version="PO 1",
        total_credits_required=12,
    )
    params.update(kwargs)
    return MastersProgramRule(**params)


def _evaluate(rule, definitions, selections, language="en"):
    offerings = [_offering(d.id) for d in definitions]
    return evaluate_program_rule(rule, selections, offerings, definitions, language)


# ─── Gesamt-LP und Zeilenaufbau ───────────────────────────────────────────────

class TestTotals:
    def test_only_included_selections_count(self):
        defs = [_definition("a", credits=6), _definition("b", credits=9)]
        result = _evaluate(_rule(), defs, [_sel("a"), _sel("b", included=False)])
        assert result.applicable_credits == 6
        row = result.row("total-credits")
        assert not row.met
        assert row.details == "6 LP short"

    def test_total_met_has_no_details(self):
        defs = [_definition("a", credits=6), _definition("b", credits=6)]
        result = _evaluate(_rule(), defs, [_sel("a"), _sel("b")])
        assert result.row("total-credits").met
        assert result.row("total-credits").details is None

    def test_fractional_credits_formatted(self):
        defs = [_definition("a", credits=7.5)]
        result = _evaluate(_rule(), defs, [_sel("a")])
        assert result.applicable_credits == 7.5
        assert result.row("total-credits").details == "4.5 LP short"

    def test_row_order(self):
        rule = _rule(category_requirements=[
            CategoryRequirement(category=CourseCategory.SE, min_credits=6),
            CategoryRequirement(category=CourseCategory.DS, min_credits=6),
        ])
        result = _evaluate(rule, [], [])
        assert [r.id for r in result.rows] == [
            "mandatory", "total-credits", "category-SE", "category-DS",
            "elective-min", "seminar", "praktikum", "thesis",
        ]

    def test_met_count_matches_rows(self):
        defs = [_definition("a", credits=12)]
        result = _evaluate(_rule(), defs, [_sel("a")])
        assert result.total_requirements == len(result.rows)
        assert result.met_requirements == sum(1 for r in result.rows if r.met)
        assert result.all_met

    def test_empty_selection(self):
        """Leere Auswahl: nur die LP-Zeile ist offen."""
        result = _evaluate(_rule(total_credits_required=10), [], [])
        assert result.applicable_credits == 0
        assert result.total_requirements == 6
        assert result.met_requirements == 5
        assert result.row("mandatory").met
        assert result.row("total-credits").details == "10 LP short"


# ─── Pflicht / Wahlpflicht ────────────────────────────────────────────────────

class TestMandatoryPartition:
    def test_partition_uses_rule_ids_not_flag(self):
        """Ein Modul in der Regel-ID-Liste zählt als Pflicht, auch ohne is_mandatory."""
        defs = [_definition("a", mandatory=False)]
        rule = _rule(
            mandatory_course_definition_ids=["a"],
            category_requirements=[
                CategoryRequirement(category=CourseCategory.SE, min_credits=6),
            ],
        )
        result = _evaluate(rule, defs, [_sel("a")])
        assert result.row("mandatory").met
        se = result.row("category-SE")
        assert not se.met
        assert se.details == "6 LP short"

    def test_flagged_but_not_listed_counts_as_elective(self):
        defs = [_definition("a", mandatory=True)]
        rule = _rule(
            category_requirements=[
                CategoryRequirement(category=CourseCategory.SE, min_credits=6),
            ],
            elective_credits_min=6,
        )
        result = _evaluate(rule, defs, [_sel("a")])
        assert result.row("category-SE").met
        assert result.row("elective-min").met

    def test_missing_mandatory_count(self):
        defs = [_definition("a"), _definition("b"), _definition("c")]
        rule = _rule(mandatory_course_definition_ids=["a", "b", "c"])
        result = _evaluate(rule, defs, [_sel("a")])
        row = result.row("mandatory")
        assert not row.met
        assert row.details == "2 mandatory courses missing"

    @pytest.mark.parametrize("b_selections", [
        [_sel("b", included=False)],
        [],
    ], ids=["excluded", "absent"])
    def test_excluded_or_absent_mandatory_missing(self, b_selections):
        defs = [_definition("a"), _definition("b")]
        rule = _rule(mandatory_course_definition_ids=["a", "b"])
        row = _evaluate(rule, defs, [_sel("a")] + b_selections).row("mandatory")
        assert not row.met
        assert row.details == "1 mandatory courses missing"

    def test_mandatory_credits_count_towards_total(self):
        defs = [_definition("a", credits=6), _definition("b", credits=6)]
        rule = _rule(mandatory_course_definition_ids=["a"], elective_credits_min=12)
        result = _evaluate(rule, defs, [_sel("a"), _sel("b")])
        assert result.row("total-credits").met
        assert result.row("elective-min").details == "6 LP elective short"


class TestDeterminism:
    @pytest.mark.parametrize("language", ["en", "de"])
    def test_equal_inputs_give_equal_results(self, language):
        defs = [
            _definition("a", credits=6, mandatory=True),
            _definition("s", category=CourseCategory.SS, credits=3, seminar=True),
            _definition("p", category=CourseCategory.DS, credits=9, tags=["Praktikum"]),
        ]
        rule = _rule(
            mandatory_course_definition_ids=["a", "x"],
            category_requirements=[
                CategoryRequirement(category=CourseCategory.DS, min_credits=6),
                CategoryRequirement(category=CourseCategory.SS, min_credits=2, max_credits=2),
            ],
            seminar_min_count=1, praktikum_min_count=1, thesis_required=True,
            elective_credits_min=10,
        )
        selections = [_sel("a"), _sel("s"), _sel("p"), _sel("ghost")]
        offerings = [_offering(d.id) for d in defs]

        first = evaluate_program_rule(rule, selections, offerings, defs, language)
        second = evaluate_program_rule(
            copy.deepcopy(rule), copy.deepcopy(selections),
            copy.deepcopy(offerings), copy.deepcopy(defs), language,
        )
        assert first == second
        assert first.model_dump() == second.model_dump()


# ─── Kategorien ───────────────────────────────────────────────────────────────

class TestCategories:
    def test_max_exceeded(self):
        defs = [
            _definition("s1", category=CourseCategory.SS, credits=3),
            _definition("s2", category=CourseCategory.SS, credits=6),
        ]
        rule = _rule(category_requirements=[
            CategoryRequirement(category=CourseCategory.SS, min_credits=2, max_credits=6),
        ])
        result = _evaluate(rule, defs, [_sel("s1"), _sel("s2")])
        row = result.row("category-SS")
        assert not row.met
        assert row.details == "3 LP above max"

    @pytest.mark.parametrize("credits,met,details", [
        (10, True, None),
        (9, False, "1 LP short"),
        (16, False, "1 LP above max"),
        (15, True, None),
    ])
    def test_min_max_boundaries(self, credits, met, details):
        defs = [_definition("s", category=CourseCategory.SE, credits=credits)]
        rule = _rule(category_requirements=[
            CategoryRequirement(category=CourseCategory.SE, min_credits=10, max_credits=15),
        ])
        row = _evaluate(rule, defs, [_sel("s")]).row("category-SE")
        assert row.met is met
        assert row.details == details

    def test_min_short_reported_before_max(self):
        rule = _rule(category_requirements=[
            CategoryRequirement(category=CourseCategory.DB, min_credits=6, max_credits=12),
        ])
        result = _evaluate(rule, [], [])
        assert result.row("category-DB").details == "6 LP short"

    def test_default_and_custom_label(self):
        rule = _rule(category_requirements=[
            CategoryRequirement(category=CourseCategory.FM, min_credits=6),
            CategoryRequirement(category=CourseCategory.HCI, min_credits=4,
                                label="Mensch-Maschine"),
        ])
        result = _evaluate(rule, [], [])
        assert result.row("category-FM").label == "FM: min. 6 LP elective"
        assert result.row("category-HCI").label == "Mensch-Maschine"

    def test_uncategorised_ignored_for_categories(self):
        defs = [_definition("x", category=None, credits=6)]
        rule = _rule(category_requirements=[
            CategoryRequirement(category=CourseCategory.SE, min_credits=6),
        ])
        result = _evaluate(rule, defs, [_sel("x")])
        assert result.applicable_credits == 6
        assert not result.row("category-SE").met

    def test_max_below_min_rejected(self):
        with pytest.raises(ValueError):
            CategoryRequirement(category=CourseCategory.SE, min_credits=12, max_credits=6)


# ─── Seminar / Praktikum / Masterarbeit ───────────────────────────────────────

class TestCounts:
    def test_seminar_count(self):
        defs = [_definition("s1", seminar=True), _definition("s2", seminar=False)]
        result = _evaluate(_rule(seminar_min_count=2), defs, [_sel("s1"), _sel("s2")])
        row = result.row("seminar")
        assert not row.met
        assert row.details == "1 seminar(s) missing"

    def test_praktikum_tag_case_insensitive(self):
        defs = [
            _definition("p1", tags=["Praktikum"]),
            _definition("p2", tags=["PRAKTIKUM", "lab"]),
        ]
        result = _evaluate(_rule(praktikum_min_count=2), defs, [_sel("p1"), _sel("p2")])
        assert result.row("praktikum").met

    def test_praktikum_tag_must_match_exactly(self):
        defs = [_definition("p1", tags=["praktikumsbericht"])]
        result = _evaluate(_rule(praktikum_min_count=1), defs, [_sel("p1")])
        assert result.row("praktikum").details == "1 praktikum missing"

    def test_thesis_required_missing(self):
        result = _evaluate(_rule(thesis_required=True), [], [])
        row = result.row("thesis")
        assert not row.met
        assert row.details == "Thesis not included"

    def test_thesis_not_required_always_met(self):
        result = _evaluate(_rule(thesis_required=False), [], [])
        assert result.row("thesis").met

    def test_thesis_included(self):
        defs = [_definition("ma", category=None, credits=30, tags=["Thesis"])]
        result = _evaluate(_rule(thesis_required=True), defs, [_sel("ma")])
        assert result.row("thesis").met


# ─── Nicht auflösbare Verweise ────────────────────────────────────────────────

class TestUnresolvable:
    def test_unknown_offering_skipped(self):
        defs = [_definition("a", credits=6)]
        selections = [_sel("a"), SelectedOffering(offering_id="off-ghost", is_included=True)]
        result = _evaluate(_rule(), defs, selections)
        assert result.applicable_credits == 6

    def test_unknown_definition_skipped(self):
        defs = [_definition("a", credits=6)]
        offerings = [_offering("a"), _offering("missing")]
        resolved = resolve_included_definitions(
            [_sel("a"), _sel("missing")], offerings, defs
        )
        assert [d.id for d in resolved] == ["a"]


# ─── Sprache ──────────────────────────────────────────────────────────────────

class TestLanguage:
    def test_german_texts(self):
        rule = _rule(mandatory_course_definition_ids=["a"], thesis_required=True)
        result = _evaluate(rule, [_definition("a")], [], language="de")
        assert result.row("mandatory").label == "Alle Pflichtmodule enthalten"
        assert result.row("mandatory").details == "1 Pflichtmodule fehlen"
        assert result.row("total-credits").label == "12 LP enthalten"
        assert result.row("total-credits").details == "12 LP fehlen"
        assert result.row("thesis").details == "Masterarbeit nicht enthalten"

    def test_unknown_language_falls_back_to_english(self):
        assert texts_for("fr") is texts_for("en")

    def test_format_text_keeps_unknown_placeholders(self):
        assert format_text("{count} of {max}", count=3.0) == "3 of {max}"

    def test_format_number(self):
        assert format_number(12.0) == "12"
        assert format_number(7.5) == "7.5"
