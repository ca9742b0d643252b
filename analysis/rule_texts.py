"""Texte der Regel-Checkliste (Englisch / Deutsch)."""

import re

RULE_TEXT: dict[str, dict[str, str]] = {
    "en": {
        "mandatory_label": "All mandatory courses included",
        "mandatory_missing": "{count} mandatory courses missing",
        "total_credits_label": "{count} LP included",
        "lp_short": "{count} LP short",
        "category_min_label": "{category}: min. {min} LP elective",
        "lp_above_max": "{count} LP above max",
        "elective_min_label": "{count} LP elective minimum",
        "elective_short": "{count} LP elective short",
        "seminar_label": "Min. {count} Seminar included",
        "seminar_missing": "{count} seminar(s) missing",
        "praktikum_label": "Min. {count} Praktikum included",
        "praktikum_missing": "{count} praktikum missing",
        "thesis_label": "Master thesis included",
        "thesis_missing": "Thesis not included",
    },
    "de": {
        "mandatory_label": "Alle Pflichtmodule enthalten",
        "mandatory_missing": "{count} Pflichtmodule fehlen",
        "total_credits_label": "{count} LP enthalten",
        "lp_short": "{count} LP fehlen",
        "category_min_label": "{category}: mind. {min} LP Wahlpflicht",
        "lp_above_max": "{count} LP über Maximum",
        "elective_min_label": "{count} LP Wahlpflicht Minimum",
        "elective_short": "{count} LP Wahlpflicht fehlen",
        "seminar_label": "Mind. {count} Seminar enthalten",
        "seminar_missing": "{count} Seminar fehlen",
        "praktikum_label": "Mind. {count} Praktikum enthalten",
        "praktikum_missing": "{count} Praktikum fehlen",
        "thesis_label": "Masterarbeit enthalten",
        "thesis_missing": "Masterarbeit nicht enthalten",
    },
}


def texts_for(language: str) -> dict[str, str]:
    """Texttabelle einer Sprache, unbekannte Sprachen fallen auf Englisch zurück."""
    return RULE_TEXT.get(language, RULE_TEXT["en"])


def format_number(value: float) -> str:
    """12.0 → "12", 7.5 → "7.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_text(template: str, **values) -> str:
    """Ersetzt alle {key}-Platzhalter; Zahlen ohne überflüssiges ".0"."""
    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        value = values[key]
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return format_number(value)
        return str(value)

    return re.sub(r"\{(\w+)\}", _replace, template)
