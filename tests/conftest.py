"""Shared fixtures for eaacheck tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    project = tmp_path / "test-project"
    project.mkdir()
    return project


@pytest.fixture
def initialized_project(tmp_project: Path) -> Path:
    """Create a project with .eaacheck initialized."""
    cc_dir = tmp_project / ".eaacheck"
    cc_dir.mkdir()
    (cc_dir / "reports").mkdir()

    config = cc_dir / "config.yaml"
    config.write_text(
        'project:\n  name: "test-project"\n\nci:\n  fail_under: 60\n',
        encoding="utf-8",
    )
    return tmp_project


@pytest.fixture
def sample_checklist() -> dict:
    """A small checklist covering every criticality."""
    return {
        "directive": "European Accessibility Act (Directive (EU) 2019/882)",
        "requirements": [
            {
                "requirement_id": "A1.1",
                "description": "Perceivable information",
                "category": "Perceivable",
                "criticality": "HIGH",
                "legal_reference": "Annex I, Section I(1)(a)",
                "status": "pending",
                "exemptible": False,
            },
            {
                "requirement_id": "A1.2",
                "description": "Operable interface",
                "category": "Operable",
                "criticality": "HIGH",
                "legal_reference": "Annex I, Section I(1)(b)",
                "status": "pending",
                "exemptible": False,
            },
            {
                "requirement_id": "A2.1",
                "description": "Accessible instructions",
                "category": "Information",
                "criticality": "MEDIUM",
                "legal_reference": "Annex I, Section I(2)",
                "status": "pending",
                "exemptible": False,
            },
            {
                "requirement_id": "A6.1",
                "description": "Named interactive elements",
                "category": "Understandable",
                "criticality": "MEDIUM",
                "legal_reference": "Annex I, Section IV(c)",
                "status": "pending",
                "exemptible": False,
            },
            {
                "requirement_id": "A7.1",
                "description": "Accessibility statement",
                "category": "Documentation",
                "criticality": "LOW",
                "legal_reference": "Annex V",
                "status": "pending",
                "exemptible": True,
            },
        ],
    }


@pytest.fixture
def sample_audits() -> dict:
    """Lighthouse-style audits: A1.1 partial, A1.2 compliant, A6.1 non-compliant."""
    return {
        "color-contrast": {
            "id": "color-contrast",
            "title": "Background and foreground colors do not have a sufficient contrast ratio.",
            "description": "Low-contrast text is difficult or impossible for many users to read.",
            "score": 0,
            "scoreDisplayMode": "binary",
            "details": {
                "type": "table",
                "items": [
                    {
                        "node": {
                            "nodeLabel": "Sign up",
                            "selector": "footer > a.signup",
                            "explanation": "Element has insufficient color contrast of 2.1",
                        }
                    }
                ],
            },
        },
        "image-alt": {
            "id": "image-alt",
            "title": "Image elements have [alt] attributes",
            "description": "Informative elements should aim for short, descriptive alternate text.",
            "score": 1,
            "scoreDisplayMode": "binary",
        },
        "meta-viewport": {
            "id": "meta-viewport",
            "title": "[user-scalable=\"no\"] is not used",
            "description": "Zooming must not be disabled.",
            "score": 1,
            "scoreDisplayMode": "binary",
        },
        "button-name": {
            "id": "button-name",
            "title": "Buttons do not have an accessible name",
            "description": "When a button doesn't have an accessible name, screen readers announce it as \"button\".",
            "score": 0,
            "scoreDisplayMode": "binary",
            "details": {
                "type": "table",
                "items": [
                    {"nodeLabel": "", "selector": "button.menu", "explanation": "Fix any of the following"},
                    {"nodeLabel": "Close", "selector": "", "explanation": ""},
                ],
            },
        },
        "first-contentful-paint": {
            "id": "first-contentful-paint",
            "title": "First Contentful Paint",
            "description": "Performance metric.",
            "score": 0,
            "scoreDisplayMode": "numeric",
        },
    }


@pytest.fixture
def audit_file(tmp_path: Path, sample_audits: dict) -> Path:
    """Write sample audits as a full Lighthouse report."""
    path = tmp_path / "audit.json"
    path.write_text(
        json.dumps({"lighthouseVersion": "12.0.0", "audits": sample_audits}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def checklist_file(tmp_path: Path, sample_checklist: dict) -> Path:
    path = tmp_path / "regulations.json"
    path.write_text(json.dumps(sample_checklist), encoding="utf-8")
    return path
