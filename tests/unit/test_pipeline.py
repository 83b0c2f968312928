"""Tests for core/pipeline.py."""

from __future__ import annotations

import json
from pathlib import Path

from eaacheck.core.pipeline import evaluate_audit, initialize_project, run_audit


class TestEvaluateAudit:
    def test_all_stages(self, sample_audits: dict, sample_checklist: dict):
        result = evaluate_audit(sample_audits, sample_checklist)
        # A1.1 HIGH partial (1.5) + A1.2 HIGH compliant (3) + A6.1 MEDIUM fail (0) over 8
        assert result.score == 56
        assert len(result.report.actionable_insights) == 3
        assert set(result.findings_by_requirement) == {"A1.1", "A6.1"}

    def test_compliance_payload_shape(self, sample_audits: dict, sample_checklist: dict):
        payload = evaluate_audit(sample_audits, sample_checklist).compliance_payload()
        assert set(payload) == {"mappedResults", "auditFix"}
        assert payload["mappedResults"]["requirements"][0]["status"] == "partially_compliant"
        assert payload["auditFix"]["A6.1"]["id"] == "button-name"
        json.dumps(payload)

    def test_bundled_checklist(self, sample_audits: dict):
        from eaacheck.compliance.loader import load_checklist

        result = evaluate_audit(sample_audits, load_checklist())
        assert "A1.4" in result.report.summary.pending_high_criticality


class TestInitializeProject:
    def test_creates_structure(self, tmp_project: Path):
        initialize_project(tmp_project)
        assert (tmp_project / ".eaacheck" / "config.yaml").exists()
        assert (tmp_project / ".eaacheck" / "reports").is_dir()

    def test_keeps_existing_config(self, initialized_project: Path):
        initialize_project(initialized_project)
        content = (initialized_project / ".eaacheck" / "config.yaml").read_text(encoding="utf-8")
        assert "fail_under: 60" in content


class TestRunAudit:
    def test_writes_outputs(self, tmp_project: Path, audit_file: Path, checklist_file: Path):
        code = run_audit(tmp_project, audit_file, checklist_path=checklist_file)
        reports = tmp_project / ".eaacheck" / "reports"
        assert code == 0
        assert json.loads((reports / "score.json").read_text(encoding="utf-8")) == {"finalScore": 56}
        report = json.loads((reports / "report.json").read_text(encoding="utf-8"))
        assert report["summary"]["pending_medium_criticality"] == ["A2.1"]
        compliance = json.loads((reports / "compliance.json").read_text(encoding="utf-8"))
        assert "auditFix" in compliance
        assert (reports / "report.md").exists()

    def test_junit_format(self, tmp_project: Path, audit_file: Path, checklist_file: Path, tmp_path: Path):
        out = tmp_path / "out"
        run_audit(tmp_project, audit_file, checklist_path=checklist_file, output_format="junit", output_dir=out)
        assert (out / "eaacheck-results.xml").exists()
        assert not (out / "report.md").exists()

    def test_ci_fails_under_threshold(self, initialized_project: Path, audit_file: Path, checklist_file: Path):
        # Project config sets fail_under: 60; score is 56
        assert run_audit(initialized_project, audit_file, checklist_path=checklist_file, ci=True) == 1

    def test_threshold_ignored_outside_ci(self, initialized_project: Path, audit_file: Path, checklist_file: Path):
        assert run_audit(initialized_project, audit_file, checklist_path=checklist_file) == 0

    def test_cli_threshold_overrides(self, initialized_project: Path, audit_file: Path, checklist_file: Path):
        code = run_audit(initialized_project, audit_file, checklist_path=checklist_file, ci=True, fail_under=50)
        assert code == 0

    def test_bad_checklist_reports_error(self, tmp_project: Path, audit_file: Path, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"directive": "EAA"}', encoding="utf-8")
        assert run_audit(tmp_project, audit_file, checklist_path=bad) == 3
        assert not (tmp_project / ".eaacheck" / "reports" / "score.json").exists()
