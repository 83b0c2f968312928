"""Markdown remediation report."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .. import __version__
from ..models.report import ComplianceReport


def _score_label(score: int) -> str:
    if score >= 90:
        return "GOOD"
    if score >= 50:
        return "NEEDS WORK"
    return "POOR"


def generate_markdown_report(
    report: ComplianceReport,
    score: int,
    project_name: str = "",
    audit_source: Optional[str] = None,
) -> str:
    """Render the compliance report as a readable markdown document."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    summary = report.summary

    lines: list[str] = []
    lines.append("# Accessibility Compliance Report")
    lines.append("")
    if project_name:
        lines.append(f"**Project:** {project_name}")
    lines.append(f"**Directive:** {report.directive}")
    lines.append(f"**Date:** {timestamp}")
    if audit_source:
        lines.append(f"**Audit:** {audit_source}")
    lines.append(f"**Score:** {score}/100 ({_score_label(score)})")
    lines.append("")

    lines.append("## Summary")
    lines.append("")
    lines.append("| Status | Requirements |")
    lines.append("|--------|--------------|")
    lines.append(f"| Compliant | {len(summary.compliant)} |")
    lines.append(f"| Non-compliant or partial | {len(summary.partially_compliant)} |")
    lines.append(f"| Exempted | {len(summary.exempted)} |")
    lines.append(f"| Pending (HIGH) | {len(summary.pending_high_criticality)} |")
    lines.append(f"| Pending (MEDIUM) | {len(summary.pending_medium_criticality)} |")
    lines.append("")

    if summary.partially_compliant:
        lines.append("## Issues To Fix")
        lines.append("")
        for item in summary.partially_compliant:
            lines.append(f"### {item.requirement_id}: {item.category} [{item.criticality}]")
            lines.append(f"**Legal Reference:** {item.legal_reference}")
            lines.append(f"**Requirement:** {item.description}")
            lines.append(f"**Issue:** {item.issue}")
            lines.append(f"**Suggestion:** {item.suggestion}")
            lines.append("")

            related = report.insights_for(item.requirement_id)
            if related:
                lines.append("**Failing Elements:**")
                for n, insight in enumerate(related, start=1):
                    lines.append(f"  {n}. **Element:** {insight.failing_element}")
                    lines.append(f"     - **Selector:** `{insight.selector}`")
                    lines.append(f"     - **Explanation:** {insight.explanation}")
                lines.append("")

    if summary.compliant:
        lines.append("## Compliant")
        lines.append("")
        for item in summary.compliant:
            lines.append(f"- **{item.requirement_id}** ({item.category}): {item.description}")
        lines.append("")

    if summary.exempted:
        lines.append("## Exempted (not applicable)")
        lines.append("")
        for item in summary.exempted:
            lines.append(f"- **{item.requirement_id}** ({item.category}): {item.description}")
        lines.append("")

    if summary.pending_high_criticality or summary.pending_medium_criticality:
        lines.append("## Not Yet Audited")
        lines.append("")
        if summary.pending_high_criticality:
            lines.append(f"- HIGH: {', '.join(summary.pending_high_criticality)}")
        if summary.pending_medium_criticality:
            lines.append(f"- MEDIUM: {', '.join(summary.pending_medium_criticality)}")
        lines.append("")

    lines.append("---")
    lines.append(f"*Generated by eaacheck v{__version__} at {timestamp}*")

    return "\n".join(lines)
