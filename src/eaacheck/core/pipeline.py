"""Audit pipeline: map -> score -> report, plus the file glue around it."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from rich.console import Console

from .. import __version__
from ..compliance.loader import load_audit_mapping, load_checklist, load_findings
from ..compliance.mapping import map_audit_to_checklist
from ..errors import InputShapeError
from ..formatters.junit import export_junit_results
from ..formatters.markdown import generate_markdown_report
from ..models.audit import AuditFinding
from ..models.checklist import Checklist
from ..models.report import ComplianceReport
from .config import CONFIG_DIR, get_effective_config, resolve_path
from .report import assemble_report
from .scoring import calculate_score, score_entries

console = Console()


@dataclass
class AuditResult:
    checklist: Checklist
    findings_by_requirement: dict[str, AuditFinding]
    score: int
    report: ComplianceReport

    def compliance_payload(self) -> dict:
        """The mapping output in its JSON shape: {mappedResults, auditFix}."""
        return {
            "mappedResults": self.checklist.to_json(),
            "auditFix": {k: f.to_json() for k, f in self.findings_by_requirement.items()},
        }


def evaluate_audit(
    findings: Mapping[str, Any],
    checklist: Any,
    audit_mapping: Optional[Mapping[str, list[str]]] = None,
    weights: Optional[Mapping[str, float]] = None,
) -> AuditResult:
    """Run all three stages on already-loaded inputs."""
    mapped, failing = map_audit_to_checklist(findings, checklist, audit_mapping)
    score = calculate_score(score_entries(mapped), weights)
    report = assemble_report(mapped, failing)
    return AuditResult(checklist=mapped, findings_by_requirement=failing, score=score, report=report)


def initialize_project(project_path: Path) -> None:
    """Initialize .eaacheck directory structure in a project."""
    cc_dir = project_path / CONFIG_DIR
    (cc_dir / "reports").mkdir(parents=True, exist_ok=True)

    config_path = cc_dir / "config.yaml"
    if not config_path.exists():
        config_path.write_text(
            "# eaacheck project configuration\n"
            "\n"
            f"eaacheck_version: \"{__version__}\"\n"
            "\n"
            "project:\n"
            f'  name: "{project_path.name}"\n'
            "\n"
            "ci:\n"
            "  fail_under: 0\n",
            encoding="utf-8",
        )

    console.print(f"  [green]Initialized[/green] {CONFIG_DIR}/ in {project_path.name}")


def _write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def run_audit(
    project_path: Path,
    audit_path: Path,
    checklist_path: Optional[Path] = None,
    mapping_path: Optional[Path] = None,
    output_format: Optional[str] = None,
    output_dir: Optional[Path] = None,
    ci: bool = False,
    fail_under: Optional[int] = None,
) -> int:
    """Evaluate an audit file and write results. Returns the exit code.

    Unreadable or malformed inputs return the `error` code whether or not
    CI mode is on; `fail` is only returned in CI mode below the threshold.
    """
    start = time.time()

    overrides: dict = {}
    if output_format:
        overrides.setdefault("output", {})["format"] = output_format
    if fail_under is not None:
        overrides.setdefault("ci", {})["fail_under"] = fail_under
    config = get_effective_config(project_path, overrides)
    exit_codes = config["ci"]["exit_codes"]

    try:
        checklist = load_checklist(checklist_path or resolve_path(config, config["checklist"]["path"]))
        audit_mapping = load_audit_mapping(mapping_path or resolve_path(config, config["mapping"]["path"]))
        findings = load_findings(audit_path)
    except InputShapeError as e:
        console.print(f"  [red]ERROR[/red] {e}")
        return exit_codes["error"]

    project_name = config["project"].get("name") or project_path.resolve().name

    console.print()
    console.print(f"  [bold cyan]EAACHECK[/bold cyan] v{__version__}")
    console.print(f"  Project:   [white]{project_name}[/white]")
    console.print(f"  Directive: [white]{checklist.directive}[/white]")
    console.print(f"  Audits:    [white]{len(findings)}[/white] from {audit_path.name}")
    console.print()

    result = evaluate_audit(findings, checklist, audit_mapping, config["scoring"]["weights"])

    reports_dir = output_dir or resolve_path(config, config["output"]["directory"])
    _write_json(reports_dir / "compliance.json", result.compliance_payload())
    _write_json(reports_dir / "score.json", {"finalScore": result.score})
    _write_json(reports_dir / "report.json", result.report.to_json())
    console.print("  [green]OK[/green] Wrote compliance.json, score.json, report.json")

    fmt = config["output"]["format"]
    if fmt == "markdown":
        md_path = reports_dir / "report.md"
        md_path.write_text(
            generate_markdown_report(result.report, result.score, project_name, audit_path.name),
            encoding="utf-8",
        )
        console.print(f"  [green]OK[/green] Markdown report: {md_path.name}")
    elif fmt == "junit":
        junit = export_junit_results(
            result.checklist,
            result.findings_by_requirement,
            reports_dir / "eaacheck-results.xml",
            suite_name=project_name,
            score=result.score,
        )
        console.print(
            f"  [green]OK[/green] JUnit XML: {junit['total_tests']} tests, "
            f"{junit['failures']} failures"
        )

    summary = result.report.summary
    console.print()
    console.print(f"  Compliant:         {len(summary.compliant)}")
    console.print(f"  Non-compliant:     {len(summary.partially_compliant)}")
    console.print(f"  Exempted:          {len(summary.exempted)}")
    console.print(
        f"  Pending:           {len(summary.pending_high_criticality)} HIGH, "
        f"{len(summary.pending_medium_criticality)} MEDIUM"
    )

    threshold = int(config["ci"].get("fail_under") or 0)
    passed = result.score >= threshold
    color = "green" if passed else "red"
    console.print(f"\n  [{color}]Score: {result.score}/100[/{color}]")
    if threshold:
        console.print(f"  Threshold: {threshold}")
    console.print(f"  Results: {reports_dir} ({round(time.time() - start, 2)}s)")
    console.print()

    if ci and not passed:
        return exit_codes["fail"]
    return exit_codes["pass"]
