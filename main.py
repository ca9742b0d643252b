"""Semester-Radial-Planer — Haupt-CLI.

Verwendung:
  python main.py setup                         Default-Konfiguration anlegen
  python main.py config show                   Konfiguration anzeigen
  python main.py demo                          Demo-Datensatz erzeugen
  python main.py validate                      Referenz-Check des Datensatzes
  python main.py plan list                     Pläne auflisten
  python main.py plan create <name>            Neuen Plan anlegen
  python main.py plan show [--plan ID]         Auswahl eines Plans anzeigen
  python main.py plan toggle <angebot>         Angebot ein-/ausschließen
  python main.py plan sync                     Fehlende Angebote ergänzen
  python main.py check [--plan ID]             Regel-Checkliste
  python main.py lanes [--plan ID]             Lane-Zuweisung anzeigen
  python main.py zoom [--season S|--month M]   Winkel je Monat für einen Zoom-Fokus
  python main.py export svg|excel              Radialkalender / Plan exportieren
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _load_config():
    """Lädt die Konfiguration (Defaults wenn noch keine existiert)."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        return mgr, mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_data_or_abort(config):
    """Lädt den Datensatz aus config.data_path oder bricht ab."""
    from models.planner_data import PlannerData, PlannerDataError

    path = Path(config.data_path)
    if not path.exists():
        console.print(
            f"[red]Keine Datendatei gefunden: {path}[/red]\n"
            "Erzeugen Sie zunächst Daten mit [bold]python main.py demo[/bold]."
        )
        sys.exit(1)
    try:
        return PlannerData.load_json(path)
    except PlannerDataError as e:
        console.print(f"[red bold]Datensatz ungültig:[/red bold]\n{e}")
        sys.exit(1)


def _resolve_plan_or_abort(data, config, plan_id: Optional[str]):
    """Plan per ID, sonst aktiver Plan aus der Config, sonst der neueste."""
    wanted = plan_id or config.active_plan_id
    if wanted:
        plan = data.plan_by_id(wanted)
        if plan is None:
            console.print(f"[red]Plan '{wanted}' nicht gefunden.[/red]")
            sys.exit(1)
        return plan
    if not data.user_plans:
        console.print(
            "[red]Keine Pläne vorhanden.[/red] "
            "Anlegen mit [bold]python main.py plan create <name>[/bold]."
        )
        sys.exit(1)
    return max(data.user_plans, key=lambda p: p.updated_at)


def _resolve_rule_or_abort(data, config, plan):
    rule = None
    if config.active_program_rule_id:
        rule = data.rule_by_id(config.active_program_rule_id)
    rule = rule or data.rule_for_plan(plan)
    if rule is None:
        console.print("[red]Keine Studiengangs-Regel im Datensatz.[/red]")
        sys.exit(1)
    return rule


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def cmd_setup(force: bool):
    """Legt die Default-Konfiguration als YAML an."""
    from config.defaults import default_planner_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] neu anlegen."
        )
        return
    path = mgr.save(default_planner_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config()

    console.print(Panel(
        f"[bold]{config.planner_name}[/bold]  |  Sprache: {config.language}  |  "
        f"Daten: {config.data_path}",
        title="Planer-Konfiguration",
        border_style="cyan",
    ))

    geo = config.geometry
    table = Table(title="Radialkalender", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    for key, value in geo.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)

    ac = config.academic
    console.print(
        f"\n[bold]Studienjahre:[/bold] {', '.join(map(str, ac.allowed_years))} | "
        f"Planungsjahr: {ac.planning_year} | "
        f"Sem 1 = {ac.program_base_semester} {ac.program_base_year}"
    )


# ─── DEMO ─────────────────────────────────────────────────────────────────────

@click.command("demo")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--json-path", default=None,
              help="Zielpfad (Default: data_path aus der Config).")
def cmd_demo(seed: int, json_path: Optional[str]):
    """Erzeugt einen Demo-Datensatz (Module, Angebote, Regel, Beispielplan)."""
    mgr, config = _load_config()
    from data.demo_data import DemoDataGenerator

    gen = DemoDataGenerator(config, seed=seed)
    data = gen.generate()
    gen.print_summary(data)
    console.print(f"\n[dim]{data.summary()}[/dim]")

    out_path = Path(json_path or config.data_path)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
def cmd_validate():
    """Prüft die Querverweise des Datensatzes."""
    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    console.print(f"\n{data.summary()}\n")
    report = data.validate_references()
    report.print_rich()
    sys.exit(0 if report.is_consistent else 1)


# ─── PLAN ─────────────────────────────────────────────────────────────────────

@click.group("plan")
def cmd_plan():
    """Semesterpläne verwalten."""


@cmd_plan.command("list")
def plan_list():
    """Listet alle Pläne auf (neueste zuerst)."""
    from models.semester import format_program_semester_with_year

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    if not data.user_plans:
        console.print("[dim]Keine Pläne vorhanden.[/dim]")
        return

    table = Table(title="Pläne", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Semester")
    table.add_column("Fachsemester")
    table.add_column("Enthalten", justify="right")
    table.add_column("Geändert")
    for p in sorted(data.user_plans, key=lambda p: p.updated_at, reverse=True):
        table.add_row(
            p.id, p.name, f"{p.semester_type.value} {p.academic_year}",
            format_program_semester_with_year(
                None, p.academic_year, p.semester_type, config.academic),
            str(len(p.included_selections())),
            p.updated_at[:19],
        )
    console.print(table)


@cmd_plan.command("create")
@click.argument("name")
@click.option("--year", type=int, default=None, help="Studienjahr (Default: Planungsjahr).")
@click.option("--semester", type=click.Choice(["winter", "summer"]), default="summer")
def plan_create(name: str, year: Optional[int], semester: str):
    """Legt einen neuen Plan mit allen Angeboten des Semesters an."""
    from models.offering import SemesterType
    from models.plan import create_plan

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    rule = data.rule_by_id(config.active_program_rule_id or "") or data.active_rule()

    plan = create_plan(
        name,
        year or config.academic.planning_year,
        SemesterType(semester),
        data.course_offerings,
        program_rule_id=rule.id if rule else "",
        academic=config.academic,
    )
    data = data.replace_plan(plan)
    data.save_json(Path(config.data_path))
    console.print(
        f"[green]✓[/green] Plan '{plan.name}' ({plan.id}) angelegt: "
        f"{len(plan.selected_offerings)} Angebote, "
        f"{plan.semester_type.value} {plan.academic_year}."
    )


@cmd_plan.command("show")
@click.option("--plan", "plan_id", default=None, help="Plan-ID.")
def plan_show(plan_id: Optional[str]):
    """Zeigt die Auswahl eines Plans."""
    from export.tui_renderer import render_plan_rows

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)

    table = Table(title=f"{plan.name} ({plan.semester_type.value} {plan.academic_year})",
                  box=box.ROUNDED)
    for col in ["#", "", "Kürzel", "Modul", "Kat.", "LP", "Zeitraum", "Prüfung"]:
        table.add_column(col)
    for row in render_plan_rows(plan, data):
        table.add_row(*row)
    console.print(table)


@cmd_plan.command("toggle")
@click.argument("offering_id")
@click.option("--plan", "plan_id", default=None, help="Plan-ID.")
def plan_toggle(offering_id: str, plan_id: Optional[str]):
    """Schließt ein Angebot in den Plan ein oder aus."""
    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)
    if data.offering_by_id(offering_id) is None:
        console.print(f"[red]Angebot '{offering_id}' nicht gefunden.[/red]")
        sys.exit(1)

    plan = plan.toggle_offering(offering_id)
    data = data.replace_plan(plan)
    data.save_json(Path(config.data_path))
    state = "enthalten" if plan.selection(offering_id).is_included else "ausgeschlossen"
    console.print(f"[green]✓[/green] {offering_id}: {state}")


@cmd_plan.command("sync")
@click.option("--plan", "plan_id", default=None, help="Plan-ID.")
def plan_sync(plan_id: Optional[str]):
    """Ergänzt fehlende Angebote des Semesters (Pflichtmodule enthalten)."""
    from models.plan import sync_mandatory

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)
    before = len(plan.selected_offerings)
    plan = sync_mandatory(plan, data.plan_offerings(plan), data.course_definitions)
    data = data.replace_plan(plan)
    data.save_json(Path(config.data_path))
    console.print(
        f"[green]✓[/green] {len(plan.selected_offerings) - before} Angebote ergänzt."
    )


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.option("--plan", "plan_id", default=None, help="Plan-ID.")
@click.option("--language", type=click.Choice(["en", "de"]), default=None,
              help="Sprache der Checkliste (Default: aus Config).")
def cmd_check(plan_id: Optional[str], language: Optional[str]):
    """Prüft einen Plan gegen die Studiengangs-Regel."""
    from analysis.rule_evaluator import evaluate_program_rule
    from export.tui_renderer import render_checklist_rows

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)
    rule = _resolve_rule_or_abort(data, config, plan)

    result = evaluate_program_rule(
        rule, plan.selected_offerings, data.course_offerings,
        data.course_definitions, language=language or config.language,
    )

    table = Table(title=f"{rule.program_name} ({rule.version})", box=box.ROUNDED)
    table.add_column("", justify="center")
    table.add_column("Anforderung")
    table.add_column("Details", style="yellow")
    for row in render_checklist_rows(result):
        table.add_row(*row)
    console.print(table)

    color = "green" if result.all_met else "red"
    console.print(
        f"[{color}]{result.met_requirements}/{result.total_requirements} erfüllt[/{color}]"
        f"  |  {result.applicable_credits:g} LP"
    )


# ─── LANES ────────────────────────────────────────────────────────────────────

@click.command("lanes")
@click.option("--plan", "plan_id", default=None, help="Plan-ID.")
def cmd_lanes(plan_id: Optional[str]):
    """Zeigt die Lane-Zuweisung der enthaltenen Angebote."""
    from export.tui_renderer import render_lane_rows
    from geometry.lanes import course_radius, lane_count
    from geometry.radial import build_display_entries

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)
    entries = build_display_entries(plan, data)

    table = Table(title="Lanes", box=box.ROUNDED)
    for col in ["Lane", "Kürzel", "Start", "Ende", "Start°", "Ende°"]:
        table.add_column(col)
    for row in render_lane_rows(entries, plan.academic_year):
        table.add_row(*row)
    console.print(table)

    n = lane_count({e.offering.id: e.lane for e in entries})
    geo = config.geometry
    outer = course_radius(max(n - 1, 0), geo.base_radius, geo.ring_spacing, geo.max_radius)
    console.print(f"{n} Lanes, äußerer Radius {outer:g}")


# ─── ZOOM ─────────────────────────────────────────────────────────────────────

@click.command("zoom")
@click.option("--season", type=click.Choice(["winter", "spring", "summer", "autumn"]),
              default=None, help="Jahreszeit fokussieren.")
@click.option("--month", type=click.IntRange(0, 11), default=None,
              help="Monat fokussieren (0 = Januar).")
@click.option("--zoom-in", "zoom_steps", type=int, default=0,
              help="Zoom-Stufen ab dem Startfokus hineinzoomen.")
@click.option("--year", type=int, default=None, help="Kalenderjahr.")
@click.option("--plan", "plan_id", default=None,
              help="Plan für Monatstermine bzw. sichtbare Angebote.")
def cmd_zoom(season: Optional[str], month: Optional[int], zoom_steps: int,
             year: Optional[int], plan_id: Optional[str]):
    """Zeigt Kalender- und Anzeigewinkel je Monat für einen Zoom-Fokus.

    Mit vorhandenem Datensatz (oder --plan) folgen bei Monatsfokus die
    Vorlesungs- und Prüfungstermine des Plans, bei Jahreszeitfokus die
    sichtbaren Angebote.
    """
    from export.tui_renderer import render_zoom_rows
    from geometry.zoom import ZoomFocus, ZoomLevel, focus_month, focus_season, zoom_in

    mgr, config = _load_config()
    if month is not None:
        focus = focus_month(month, season)
    elif season is not None:
        focus = focus_season(season)
    else:
        focus = ZoomFocus()
    for _ in range(zoom_steps):
        focus = zoom_in(focus, date.today())

    year = year or config.academic.planning_year
    label = focus.level.value
    if focus.season:
        label += f" / {focus.season.value}"
    if focus.month is not None:
        label += f" / Monat {focus.month}"
    table = Table(title=f"Zoom-Fokus: {label}", box=box.ROUNDED)
    for col in ["Monat", "Kalender", "Anzeige"]:
        table.add_column(col)
    for row in render_zoom_rows(focus, year):
        table.add_row(*row)
    console.print(table)

    if focus.level == ZoomLevel.YEAR:
        return
    if plan_id is None and not Path(config.data_path).exists():
        return
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)
    _print_focus_entries(focus, plan, data)


def _print_focus_entries(focus, plan, data):
    from export.helpers import MONTH_NAMES
    from export.tui_renderer import render_agenda_rows
    from geometry.agenda import build_month_events, calendar_year_for_month, entries_for_season
    from geometry.radial import build_display_entries
    from geometry.zoom import ZoomLevel

    entries = build_display_entries(plan, data)
    if focus.level == ZoomLevel.MONTH:
        events = build_month_events(entries, plan.academic_year, focus.month)
        title = (
            f"Termine {MONTH_NAMES[focus.month]} "
            f"{calendar_year_for_month(plan.academic_year, focus.month)} – {plan.name}"
        )
        rows = render_agenda_rows(events)
        if not rows:
            console.print(f"[dim]{title}: keine Termine.[/dim]")
            return
        table = Table(title=title, box=box.ROUNDED)
        for col in ["Tag", "Art", "Eintrag", "Zeit"]:
            table.add_column(col)
        for row in rows:
            table.add_row(*row)
        console.print(table)
        return

    visible = entries_for_season(entries, focus.season)
    table = Table(title=f"Sichtbare Angebote ({focus.season.value}) – {plan.name}",
                  box=box.ROUNDED)
    for col in ["Lane", "Kürzel", "Start", "Ende"]:
        table.add_column(col)
    for entry in visible:
        table.add_row(str(entry.lane), entry.definition.short_code,
                      entry.offering.start_date, entry.offering.end_date)
    console.print(table)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.group("export")
def cmd_export():
    """Exportiert einen Plan als SVG oder Excel."""


@cmd_export.command("svg")
@click.option("--plan", "plan_id", default=None, help="Plan-ID.")
@click.option("--output", "-o", default="output/radialkalender.svg",
              help="Ausgabepfad.")
@click.option("--season", type=click.Choice(["winter", "spring", "summer", "autumn"]),
              default=None, help="Jahreszeit fokussieren.")
@click.option("--month", type=click.IntRange(0, 11), default=None,
              help="Monat fokussieren (0 = Januar).")
def export_svg(plan_id: Optional[str], output: str, season: Optional[str],
               month: Optional[int]):
    """Zeichnet den Radialkalender eines Plans als SVG."""
    from export.svg_export import SvgExporter
    from geometry.radial import build_display_entries
    from geometry.zoom import ZoomFocus, focus_month, focus_season

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)

    if month is not None:
        focus = focus_month(month, season)
    elif season is not None:
        focus = focus_season(season)
    else:
        focus = ZoomFocus()

    entries = build_display_entries(plan, data)
    path = SvgExporter(entries, plan.academic_year, focus, config.geometry).export(Path(output))
    console.print(f"[green]✓[/green] SVG gespeichert: {path}")


@cmd_export.command("excel")
@click.option("--plan", "plan_id", default=None, help="Plan-ID.")
@click.option("--output", "-o", default="output/plan.xlsx", help="Ausgabepfad.")
def export_excel(plan_id: Optional[str], output: str):
    """Exportiert Plan-Übersicht und Regel-Checkliste als Excel."""
    from analysis.rule_evaluator import evaluate_program_rule
    from export.excel_export import ExcelExporter

    mgr, config = _load_config()
    data = _load_data_or_abort(config)
    plan = _resolve_plan_or_abort(data, config, plan_id)
    rule = _resolve_rule_or_abort(data, config, plan)
    result = evaluate_program_rule(
        rule, plan.selected_offerings, data.course_offerings,
        data.course_definitions, language=config.language,
    )
    path = ExcelExporter(plan, data, result).export(Path(output))
    console.print(f"[green]✓[/green] Excel gespeichert: {path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Semester-Radial-Planer: Kursauswahl, Regelprüfung und Radialkalender.

    Starten Sie mit: python main.py demo
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_demo)
cli.add_command(cmd_validate)
cli.add_command(cmd_plan)
cli.add_command(cmd_check)
cli.add_command(cmd_lanes)
cli.add_command(cmd_zoom)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
