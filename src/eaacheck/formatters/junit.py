"""JUnit XML formatter for CI/CD integration."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional
from xml.dom import minidom
from xml.etree import ElementTree as ET

from ..core.report import FindingPresentation
from ..models.audit import AuditFinding
from ..models.checklist import Checklist, RequirementStatus

FAILING_STATUSES = (RequirementStatus.NON_COMPLIANT, RequirementStatus.PARTIALLY_COMPLIANT)


def export_junit_results(
    checklist: Checklist,
    findings_by_requirement: Mapping[str, AuditFinding],
    output_path: Path,
    suite_name: str = "eaacheck",
    score: Optional[int] = None,
) -> dict:
    """Export evaluated requirements as JUnit XML.

    Args:
        checklist: Mapped checklist. Pending requirements are not reported.
        findings_by_requirement: Failing finding per requirement id.
        output_path: Path to write the XML file.
        suite_name: Name for the testsuites element.
        score: Compliance score, stored as a property when given.

    Returns:
        Dict with: path, total_tests, failures, skipped, passed.
    """
    testsuites = ET.Element("testsuites")
    testsuites.set("name", suite_name)
    testsuites.set("timestamp", datetime.now().strftime("%Y-%m-%dT%H:%M:%S"))
    if score is not None:
        properties = ET.SubElement(testsuites, "properties")
        prop = ET.SubElement(properties, "property")
        prop.set("name", "score")
        prop.set("value", str(score))

    by_category: dict[str, list] = {}
    for requirement in checklist.requirements:
        if requirement.status == RequirementStatus.PENDING:
            continue
        by_category.setdefault(requirement.category or "Uncategorized", []).append(requirement)

    total_tests = 0
    total_failures = 0
    total_skipped = 0

    for category, requirements in by_category.items():
        testsuite = ET.SubElement(testsuites, "testsuite")
        testsuite.set("name", category)
        testsuite.set("tests", str(len(requirements)))

        suite_failures = 0
        suite_skipped = 0

        for requirement in requirements:
            total_tests += 1

            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", f"{requirement.requirement_id}: {requirement.description}")
            testcase.set("classname", category)

            if requirement.status == RequirementStatus.EXEMPTED:
                suite_skipped += 1
                total_skipped += 1
                skipped = ET.SubElement(testcase, "skipped")
                skipped.set("message", "Not applicable")
                continue

            if requirement.status not in FAILING_STATUSES:
                continue

            total_failures += 1
            suite_failures += 1

            presentation = FindingPresentation(
                requirement.requirement_id,
                findings_by_requirement.get(requirement.requirement_id),
            )
            failure = ET.SubElement(testcase, "failure")
            failure.set("message", f"[{requirement.criticality.value}] {presentation.issue}")
            failure.set("type", requirement.status.value)

            text_parts = [
                f"Criticality: {requirement.criticality.value}",
                f"Legal Reference: {requirement.legal_reference}",
                f"\nSuggestion:\n{presentation.suggestion}",
                "\nFailing Elements:",
            ]
            for insight in presentation.insights():
                text_parts.append(f"- {insight.failing_element} [{insight.selector}]: {insight.explanation}")
            failure.text = "\n".join(text_parts)

        testsuite.set("failures", str(suite_failures))
        testsuite.set("errors", "0")
        testsuite.set("skipped", str(suite_skipped))

    testsuites.set("tests", str(total_tests))
    testsuites.set("failures", str(total_failures))
    testsuites.set("errors", "0")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Pretty-print XML
    rough = ET.tostring(testsuites, encoding="unicode")
    dom = minidom.parseString(rough)
    xml_str = dom.toprettyxml(indent="  ", encoding="UTF-8")
    output_path.write_bytes(xml_str)

    return {
        "path": str(output_path),
        "total_tests": total_tests,
        "failures": total_failures,
        "skipped": total_skipped,
        "passed": total_tests - total_failures - total_skipped,
    }
