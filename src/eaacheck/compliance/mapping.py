"""Audit-to-requirement mapping engine.

Tallies each mapped audit result against the requirements it covers and
derives a compliance status per requirement.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..models.audit import AuditFinding
from ..models.checklist import Checklist, RequirementStatus
from .loader import load_audit_mapping, parse_checklist, parse_findings

_default_mapping: Optional[dict[str, list[str]]] = None


def default_audit_mapping() -> dict[str, list[str]]:
    """Bundled Lighthouse -> EAA table, loaded once."""
    global _default_mapping
    if _default_mapping is None:
        _default_mapping = load_audit_mapping()
    return _default_mapping


@dataclass
class StatusTally:
    compliant: int = 0
    non_compliant: int = 0
    exempted: int = 0

    def add(self, score: Optional[float]) -> bool:
        """Count one audit result. Returns True when it counted as non-compliant."""
        if score == 1:
            self.compliant += 1
        elif score == 0:
            self.non_compliant += 1
            return True
        else:
            self.exempted += 1
        return False

    def resolve(self) -> RequirementStatus:
        if self.non_compliant > 0 and self.compliant > 0:
            return RequirementStatus.PARTIALLY_COMPLIANT
        if self.non_compliant > 0:
            return RequirementStatus.NON_COMPLIANT
        if self.compliant > 0:
            return RequirementStatus.COMPLIANT
        return RequirementStatus.EXEMPTED


def tally_findings(
    findings: Mapping[str, AuditFinding],
    audit_mapping: Mapping[str, list[str]],
) -> tuple[dict[str, StatusTally], dict[str, AuditFinding]]:
    """Tally audit results per requirement id.

    A requirement's recorded finding is the last non-compliant one in iteration order.
    """
    tallies: dict[str, StatusTally] = defaultdict(StatusTally)
    failing: dict[str, AuditFinding] = {}

    for audit_id, finding in findings.items():
        requirement_ids = audit_mapping.get(audit_id)
        if not requirement_ids:
            continue
        for requirement_id in requirement_ids:
            if tallies[requirement_id].add(finding.score):
                failing[requirement_id] = finding

    return dict(tallies), failing


def map_audit_to_checklist(
    findings: Mapping[str, Any],
    checklist: Any,
    audit_mapping: Optional[Mapping[str, list[str]]] = None,
) -> tuple[Checklist, dict[str, AuditFinding]]:
    """Map audit results onto a checklist.

    Returns a new checklist with updated statuses (the input is left untouched)
    and the failing finding recorded per requirement id. Audits absent from the
    mapping table are ignored.
    """
    parsed_findings = parse_findings(findings)
    source = parse_checklist(checklist)
    if audit_mapping is None:
        audit_mapping = default_audit_mapping()

    tallies, failing = tally_findings(parsed_findings, audit_mapping)

    mapped = source.model_copy(deep=True)
    for requirement in mapped.requirements:
        tally = tallies.get(requirement.requirement_id)
        if tally is not None:
            requirement.status = tally.resolve()

    return mapped, failing
