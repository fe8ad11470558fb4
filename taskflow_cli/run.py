# -*- coding: utf-8 -*-
import json
import logging
import typing as t
from dataclasses import asdict
from pathlib import Path

import click
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from grade_projector import GradeSnapshot, project, snapshot_to_dict, summary_rows
from services.shared.config import DEFAULT_TARGET_GRADE
from services.shared.errors import TaskflowError
from syllabus_extractor import SyllabusExtraction, parse_syllabus_pdf, parse_syllabus_text
from taskflow_cli.utils import console, err_console, expand_syllabus_paths, truncate_title

logger = logging.getLogger("taskflow")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def parse_file(path: Path) -> SyllabusExtraction:
    """Run the extractor on a PDF or a plain-text syllabus."""
    if path.suffix.lower() == ".txt":
        return parse_syllabus_text(path.read_text(encoding="utf-8"))
    return parse_syllabus_pdf(str(path))


def create_candidates_table(name: str, extraction: SyllabusExtraction) -> Table:
    table = Table(title=f"{name}: assignments", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="white")
    table.add_column("Due", style="yellow", no_wrap=True)
    table.add_column("Weight", justify="right")
    table.add_column("Category", style="cyan")

    for candidate in extraction.assignments:
        table.add_row(
            truncate_title(candidate.title),
            candidate.due_date.isoformat() if candidate.due_date else "[dim]?[/dim]",
            f"{candidate.weight:g}%" if candidate.weight is not None else "[dim]?[/dim]",
            candidate.category,
        )
    return table


def create_breakdown_table(name: str, extraction: SyllabusExtraction) -> Table:
    table = Table(title=f"{name}: grade breakdown", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="white")
    table.add_column("Weight", justify="right", style="green")
    for entry in extraction.grade_breakdown:
        table.add_row(entry.category, f"{entry.weight:g}%")
    return table


def create_projection_tables(snapshot: GradeSnapshot) -> list[Table]:
    summary = Table(title="Grade projection", show_header=False)
    summary.add_column("", style="cyan")
    summary.add_column("", style="white")
    for label, value in summary_rows(snapshot):
        summary.add_row(label, value)

    tables = [summary]
    if snapshot.scenarios:
        scenarios = Table(title="What-if scenarios", show_header=True, header_style="bold magenta")
        scenarios.add_column("Scenario", style="white")
        scenarios.add_column("Final grade", justify="right", style="yellow")
        scenarios.add_column("Letter", style="green")
        for row in snapshot_to_dict(snapshot)["scenarios"]:
            scenarios.add_row(row["name"], f"{row['projected_grade']:.1f}%", row["letter_grade"])
        tables.append(scenarios)
    return tables


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main() -> None:
    """Extract assignments from syllabi and project course grades."""


@main.command()
@click.argument("paths", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print the extraction results as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def extract(paths: tuple[str, ...], as_json: bool, verbose: bool) -> None:
    """Extract assignment candidates and grade breakdowns.

    PATHS: Syllabus PDF or .txt files, or directories containing them.
    """
    setup_logging(verbose)
    files = expand_syllabus_paths(paths)

    results: list[dict[str, t.Any]] = []
    failures = 0
    for path in files:
        logger.debug("Parsing %s", path)
        try:
            extraction = parse_file(path)
        except (TaskflowError, OSError) as e:
            failures += 1
            err_console.print(f"[red]Error:[/red] {path.name}: {escape(str(e))}")
            continue

        if as_json:
            results.append({"file": str(path), **asdict(extraction)})
            continue

        console.print(create_candidates_table(path.name, extraction))
        if extraction.grade_breakdown:
            console.print(create_breakdown_table(path.name, extraction))
        else:
            console.print(f"[dim]{path.name}: no grade breakdown found[/dim]")

    if as_json:
        click.echo(json.dumps(results, indent=2, default=str))
    elif len(files) > 1:
        console.print(
            Panel.fit(
                f"Processed [bold]{len(files) - failures}[/bold] of {len(files)} syllabus files",
                border_style="blue",
            )
        )

    if failures:
        raise SystemExit(1)


@main.command(name="project")
@click.argument("items_json", type=click.File("r"))
@click.option("--target", "-t", type=float, default=None, help="Target course grade (percent).")
@click.option("--json", "as_json", is_flag=True, help="Print the projection as JSON.")
def project_command(items_json: t.TextIO, target: t.Optional[float], as_json: bool) -> None:
    """Project a course grade from a JSON list of grade items.

    ITEMS_JSON: File (or - for stdin) holding a list of items, or an object
    with "items" and an optional "target_grade".
    """
    setup_logging(False)
    try:
        data = json.load(items_json)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Error:[/red] Invalid JSON: {escape(str(e))}")
        raise SystemExit(1)

    file_target = None
    if isinstance(data, dict):
        file_target = data.get("target_grade")
        data = data.get("items", [])

    if target is not None:
        target_grade = target
    elif file_target is not None:
        target_grade = file_target
    else:
        target_grade = DEFAULT_TARGET_GRADE

    try:
        snapshot = project(data, target_grade=target_grade)
    except TaskflowError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(snapshot_to_dict(snapshot), indent=2))
        return

    for table in create_projection_tables(snapshot):
        console.print(table)


if __name__ == "__main__":
    main()
