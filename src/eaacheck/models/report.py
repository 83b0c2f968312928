"""Remediation report data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RequirementSummary(BaseModel):
    """A requirement as listed in the report; status is implied by the bucket."""

    requirement_id: str
    description: str
    category: str
    criticality: str
    legal_reference: str


class IssueSummary(RequirementSummary):
    issue: str
    suggestion: str


class ActionableInsight(BaseModel):
    """One remediation record tied to a failing UI element."""

    issue: str
    failing_element: str
    selector: str
    explanation: str
    suggestion: str


class ReportSummary(BaseModel):
    partially_compliant: list[IssueSummary] = []
    compliant: list[RequirementSummary] = []
    exempted: list[RequirementSummary] = []
    pending_high_criticality: list[str] = []
    pending_medium_criticality: list[str] = []


class ComplianceReport(BaseModel):
    directive: str
    summary: ReportSummary = ReportSummary()
    actionable_insights: list[ActionableInsight] = []
    # Same insights keyed by requirement id; not part of the JSON shape
    insights_by_requirement: dict[str, list[ActionableInsight]] = Field(default_factory=dict, exclude=True)

    def insights_for(self, requirement_id: str) -> list[ActionableInsight]:
        return list(self.insights_by_requirement.get(requirement_id, []))

    def to_json(self) -> dict:
        return self.model_dump(mode="json")
