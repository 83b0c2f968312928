"""Checklist, audit mapping and audit result loading."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from ..errors import InputShapeError
from ..models.audit import AuditFinding
from ..models.checklist import Checklist

DEFAULT_CHECKLIST_ID = "eaa"


def read_structured(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
    except OSError as e:
        raise InputShapeError(f"Cannot read {path}: {e}") from e
    try:
        if path.suffix.lower() == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InputShapeError(f"{path} could not be parsed: {e}") from e


def get_available_checklists() -> list[dict]:
    """List the checklist templates bundled with the package."""
    checklists: list[dict] = []
    data_dir = resources.files("eaacheck.data") / "checklists"
    for entry in sorted(data_dir.iterdir(), key=lambda e: e.name):
        if not entry.name.endswith(".yaml"):
            continue
        content = yaml.safe_load(entry.read_text(encoding="utf-8")) or {}
        checklists.append({
            "id": content.get("id", entry.name[:-5]),
            "name": content.get("name", ""),
            "directive": content.get("directive", ""),
            "requirements": len(content.get("requirements") or []),
        })
    return checklists


def parse_checklist(data: Any) -> Checklist:
    """Validate a JSON-decoded checklist.

    Raises InputShapeError when the structure is unusable, so callers never get partial output.
    """
    if isinstance(data, Checklist):
        return data
    if not isinstance(data, dict):
        raise InputShapeError("Checklist must be an object with a 'requirements' array.")
    requirements = data.get("requirements")
    if not isinstance(requirements, list):
        raise InputShapeError("'requirements' field is missing or malformed.")

    seen: set[str] = set()
    for index, req in enumerate(requirements):
        if not isinstance(req, dict) or not req.get("requirement_id"):
            raise InputShapeError(f"Requirement #{index} has no 'requirement_id'.")
        if req["requirement_id"] in seen:
            raise InputShapeError(f"Duplicate requirement id: {req['requirement_id']}")
        seen.add(req["requirement_id"])

    try:
        return Checklist.model_validate({
            "directive": data.get("directive") or "",
            "requirements": requirements,
        })
    except ValidationError as e:
        raise InputShapeError(f"Invalid checklist: {e}") from e


def load_checklist(path: Optional[Path] = None) -> Checklist:
    """Load a checklist from a file, or the bundled EAA template when no path is given."""
    if path is None:
        data_file = resources.files("eaacheck.data") / "checklists" / f"{DEFAULT_CHECKLIST_ID}.yaml"
        return parse_checklist(yaml.safe_load(data_file.read_text(encoding="utf-8")))
    return parse_checklist(read_structured(path))


def parse_audit_mapping(data: Any) -> dict[str, list[str]]:
    """Validate an audit id -> requirement ids table."""
    if not isinstance(data, dict):
        raise InputShapeError("Audit mapping must be an object of audit id -> requirement ids.")
    mapping: dict[str, list[str]] = {}
    for audit_id, requirement_ids in data.items():
        if isinstance(requirement_ids, str):
            requirement_ids = [requirement_ids]
        if not isinstance(requirement_ids, list):
            raise InputShapeError(f"Mapping for '{audit_id}' must be a list of requirement ids.")
        mapping[str(audit_id)] = [str(r) for r in requirement_ids]
    return mapping


def load_audit_mapping(path: Optional[Path] = None) -> dict[str, list[str]]:
    """Load the audit mapping table, defaulting to the bundled Lighthouse -> EAA table."""
    if path is None:
        data_file = resources.files("eaacheck.data") / "audit_mapping.yaml"
        return parse_audit_mapping(yaml.safe_load(data_file.read_text(encoding="utf-8")))
    return parse_audit_mapping(read_structured(path))


def parse_findings(data: Any) -> dict[str, AuditFinding]:
    """Normalize JSON-decoded audit results keyed by audit id.

    Accepts either the bare audits object or a full Lighthouse report with an
    ``audits`` key. Non-object entries are dropped; wrong-typed fields inside an
    entry degrade to None so the score still counts.
    """
    if isinstance(data, dict) and isinstance(data.get("audits"), dict):
        data = data["audits"]
    if not isinstance(data, dict):
        raise InputShapeError("Audit results must be an object keyed by audit id.")

    findings: dict[str, AuditFinding] = {}
    for audit_id, entry in data.items():
        if isinstance(entry, AuditFinding):
            findings[audit_id] = entry
            continue
        if not isinstance(entry, dict):
            continue
        findings[audit_id] = AuditFinding.model_validate({"id": audit_id, **entry})
    return findings


def load_findings(path: Path) -> dict[str, AuditFinding]:
    """Load audit results (audit.json) from disk."""
    return parse_findings(read_structured(path))
