"""Remediation report assembly.

Partitions a mapped checklist by status and turns failing audit results into
actionable insights, one per failing element.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..compliance.loader import parse_checklist, parse_findings
from ..models.audit import AuditFinding
from ..models.checklist import Checklist, Criticality, Requirement, RequirementStatus
from ..models.report import (
    ActionableInsight,
    ComplianceReport,
    IssueSummary,
    ReportSummary,
    RequirementSummary,
)

DIRECTIVE_FALLBACK = "Unknown Directive"
ISSUE_FALLBACK = "Issue not specified."
SUGGESTION_FALLBACK = "No specific fix available."
ELEMENT_FALLBACK = "Unknown Element"
SELECTOR_FALLBACK = "No selector available"
EXPLANATION_FALLBACK = "No explanation provided."
ITEM_SUGGESTION_FALLBACK = "Follow the WCAG guidelines for compliance."
NO_ELEMENTS = "No specific elements identified."
NO_ELEMENTS_SELECTOR = "N/A"
NO_ELEMENTS_EXPLANATION = "No specific failing elements provided."
NO_ELEMENTS_SUGGESTION = "Follow accessibility guidelines for best practices."


@dataclass(frozen=True)
class FindingPresentation:
    """Applies every display fallback for the finding recorded against a requirement."""

    requirement_id: str
    finding: Optional[AuditFinding] = None

    @property
    def issue(self) -> str:
        if self.finding is not None and self.finding.title:
            return self.finding.title
        return ISSUE_FALLBACK

    @property
    def suggestion(self) -> str:
        if self.finding is not None and self.finding.description:
            return self.finding.description
        return SUGGESTION_FALLBACK

    @property
    def issue_label(self) -> str:
        return f"{self.issue} ({self.requirement_id})"

    def _description_or(self, fallback: str) -> str:
        if self.finding is not None and self.finding.description:
            return self.finding.description
        return fallback

    def insights(self) -> list[ActionableInsight]:
        items = self.finding.failing_items if self.finding is not None else []
        if not items:
            return [ActionableInsight(
                issue=self.issue_label,
                failing_element=NO_ELEMENTS,
                selector=NO_ELEMENTS_SELECTOR,
                explanation=NO_ELEMENTS_EXPLANATION,
                suggestion=self._description_or(NO_ELEMENTS_SUGGESTION),
            )]
        suggestion = self._description_or(ITEM_SUGGESTION_FALLBACK)
        return [
            ActionableInsight(
                issue=self.issue_label,
                failing_element=item.node_label or ELEMENT_FALLBACK,
                selector=item.selector or SELECTOR_FALLBACK,
                explanation=item.explanation or EXPLANATION_FALLBACK,
                suggestion=suggestion,
            )
            for item in items
        ]


def summarize_requirement(requirement: Requirement) -> RequirementSummary:
    return RequirementSummary(
        requirement_id=requirement.requirement_id,
        description=requirement.description,
        category=requirement.category,
        criticality=requirement.criticality.value,
        legal_reference=requirement.legal_reference,
    )


def assemble_report(
    checklist: Any,
    findings_by_requirement: Optional[Mapping[str, Any]] = None,
) -> ComplianceReport:
    """Build the remediation report from a mapped checklist.

    - compliant: listed as-is
    - partially/non-compliant: listed with issue and suggestion, plus insights
    - exempted: listed in their own bucket
    - pending: HIGH and MEDIUM ids only; LOW pending is not surfaced
    """
    mapped: Checklist = parse_checklist(checklist)
    failing = parse_findings(dict(findings_by_requirement or {}))

    summary = ReportSummary()
    insights: list[ActionableInsight] = []
    grouped: dict[str, list[ActionableInsight]] = {}

    for requirement in mapped.requirements:
        status = requirement.status

        if status == RequirementStatus.COMPLIANT:
            summary.compliant.append(summarize_requirement(requirement))

        elif status in (RequirementStatus.PARTIALLY_COMPLIANT, RequirementStatus.NON_COMPLIANT):
            presentation = FindingPresentation(
                requirement.requirement_id, failing.get(requirement.requirement_id)
            )
            summary.partially_compliant.append(IssueSummary(
                **summarize_requirement(requirement).model_dump(),
                issue=presentation.issue,
                suggestion=presentation.suggestion,
            ))
            item_insights = presentation.insights()
            insights.extend(item_insights)
            grouped[requirement.requirement_id] = item_insights

        elif status == RequirementStatus.EXEMPTED:
            summary.exempted.append(summarize_requirement(requirement))

        elif status == RequirementStatus.PENDING:
            if requirement.criticality == Criticality.HIGH:
                summary.pending_high_criticality.append(requirement.requirement_id)
            elif requirement.criticality == Criticality.MEDIUM:
                summary.pending_medium_criticality.append(requirement.requirement_id)

    return ComplianceReport(
        directive=mapped.directive or DIRECTIVE_FALLBACK,
        summary=summary,
        actionable_insights=insights,
        insights_by_requirement=grouped,
    )
