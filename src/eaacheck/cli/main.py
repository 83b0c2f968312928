"""eaacheck command line.

`run` evaluates an audit end to end; `map`, `score` and `report` expose each
stage on its own with JSON in and JSON out.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..errors import InputShapeError


def _emit(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _read_input(path: str) -> Any:
    from ..compliance.loader import read_structured

    try:
        return read_structured(Path(path))
    except InputShapeError as e:
        _fail(str(e))


def _optional_path(value: str | None) -> Path | None:
    return Path(value).resolve() if value else None


@click.group()
@click.version_option(__version__, prog_name="eaacheck")
def cli() -> None:
    """eaacheck - score website audits against European Accessibility Act requirements."""


@cli.command()
@click.option("--audit", "-a", type=click.Path(exists=True, dir_okay=False), required=True, help="Audit results (audit.json)")
@click.option("--project", "-p", type=click.Path(exists=True, file_okay=False), default=".", help="Project path")
@click.option("--checklist", "-c", type=click.Path(exists=True, dir_okay=False), help="Custom checklist file")
@click.option("--mapping", "-m", type=click.Path(exists=True, dir_okay=False), help="Custom audit mapping file")
@click.option("--output-format", "-f", type=click.Choice(["markdown", "json", "junit"]))
@click.option("--output-dir", "-o", type=click.Path(file_okay=False), help="Where to write results")
@click.option("--ci", is_flag=True, help="CI mode: enable exit codes")
@click.option("--fail-under", type=click.IntRange(0, 100), help="Minimum passing score in CI mode")
def run(
    audit: str,
    project: str,
    checklist: str | None,
    mapping: str | None,
    output_format: str | None,
    output_dir: str | None,
    ci: bool,
    fail_under: int | None,
) -> None:
    """Map an audit, score it and write the remediation report."""
    from ..core.pipeline import run_audit

    exit_code = run_audit(
        project_path=Path(project),
        audit_path=Path(audit),
        checklist_path=_optional_path(checklist),
        mapping_path=_optional_path(mapping),
        output_format=output_format,
        output_dir=_optional_path(output_dir),
        ci=ci,
        fail_under=fail_under,
    )
    if ci or exit_code:
        sys.exit(exit_code)


@cli.command()
@click.option("--project", "-p", type=click.Path(exists=True, file_okay=False), required=True)
def init(project: str) -> None:
    """Initialize eaacheck in a project."""
    from ..core.pipeline import initialize_project

    initialize_project(Path(project))


@cli.command("checklist")
@click.option("--checklist", "-c", type=click.Path(exists=True, dir_okay=False), help="Custom checklist file")
@click.option("--list", "list_all", is_flag=True, help="List bundled checklists instead")
def show_checklist(checklist: str | None, list_all: bool) -> None:
    """Print the requirement checklist as JSON."""
    from ..compliance.loader import get_available_checklists, load_checklist

    if list_all:
        _emit(get_available_checklists())
        return
    try:
        _emit(load_checklist(_optional_path(checklist)).to_json())
    except InputShapeError as e:
        _fail(str(e))


@cli.command("map")
@click.option("--audit", "-a", type=click.Path(exists=True, dir_okay=False), required=True)
@click.option("--checklist", "-c", type=click.Path(exists=True, dir_okay=False))
@click.option("--mapping", "-m", type=click.Path(exists=True, dir_okay=False))
def map_command(audit: str, checklist: str | None, mapping: str | None) -> None:
    """Map audit results onto the checklist; prints {mappedResults, auditFix}."""
    from ..compliance.loader import load_audit_mapping, load_checklist, load_findings
    from ..compliance.mapping import map_audit_to_checklist

    try:
        mapped, failing = map_audit_to_checklist(
            load_findings(Path(audit)),
            load_checklist(_optional_path(checklist)),
            load_audit_mapping(_optional_path(mapping)),
        )
    except InputShapeError as e:
        _fail(str(e))
        return
    _emit({
        "mappedResults": mapped.to_json(),
        "auditFix": {k: f.to_json() for k, f in failing.items()},
    })


@cli.command()
@click.option("--input", "-i", "input_path", type=click.Path(exists=True, dir_okay=False), required=True)
def score(input_path: str) -> None:
    """Score mapped results; prints {"finalScore": N}.

    Accepts the output of `map`, a checklist, `{"mappedResults": [entries]}`
    or a bare list of {requirement_id, status, criticality} entries.
    """
    from ..core.scoring import calculate_score

    data = _read_input(input_path)
    if isinstance(data, dict):
        data = data.get("mappedResults", data)
    if isinstance(data, dict):
        if not isinstance(data.get("requirements"), list):
            _fail("'requirements' field is missing or malformed.")
            return
        data = data["requirements"]
    if not isinstance(data, list):
        _fail("Score input must be a list of entries.")
        return
    try:
        _emit({"finalScore": calculate_score(data)})
    except InputShapeError as e:
        _fail(str(e))


@cli.command()
@click.option("--input", "-i", "input_path", type=click.Path(exists=True, dir_okay=False), required=True)
@click.option("--output-format", "-f", type=click.Choice(["json", "markdown"]), default="json")
def report(input_path: str, output_format: str) -> None:
    """Build the remediation report from the output of `map`."""
    from ..compliance.loader import parse_checklist, parse_findings
    from ..core.report import assemble_report
    from ..core.scoring import calculate_score, score_entries
    from ..formatters.markdown import generate_markdown_report

    data = _read_input(input_path)
    if not isinstance(data, dict):
        _fail("Invalid compliance data provided.")
        return
    try:
        mapped = parse_checklist(data.get("mappedResults"))
        failing = parse_findings(data.get("auditFix") or {})
        result = assemble_report(mapped, failing)
    except InputShapeError as e:
        _fail(str(e))
        return

    if output_format == "markdown":
        click.echo(generate_markdown_report(result, calculate_score(score_entries(mapped))))
    else:
        _emit(result.to_json())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
