"""Checklist data models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Criticality(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class RequirementStatus(str, Enum):
    PENDING = "pending"
    COMPLIANT = "compliant"
    PARTIALLY_COMPLIANT = "partially_compliant"
    NON_COMPLIANT = "non_compliant"
    EXEMPTED = "exempted"


class Requirement(BaseModel):
    """A single legal requirement from the checklist template."""

    requirement_id: str
    description: str = ""
    category: str = ""
    criticality: Criticality = Criticality.LOW
    legal_reference: str = ""
    status: RequirementStatus = RequirementStatus.PENDING
    exemptible: bool = False


class Checklist(BaseModel):
    """Ordered requirements for one directive."""

    directive: str = ""
    requirements: list[Requirement] = []

    def to_json(self) -> dict:
        return self.model_dump(mode="json")


class ScoreEntry(BaseModel):
    """One scorer input row. Criticality stays a plain string so unknown values still score."""

    requirement_id: str = ""
    status: RequirementStatus
    criticality: Optional[str] = None
