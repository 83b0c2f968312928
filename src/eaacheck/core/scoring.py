"""Weighted compliance score."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from ..errors import InputShapeError
from ..models.checklist import Checklist, RequirementStatus, ScoreEntry

CRITICALITY_WEIGHTS: dict[str, float] = {
    "HIGH": 3,
    "MEDIUM": 2,
    "LOW": 1,
}

STATUS_VALUES: dict[RequirementStatus, float] = {
    RequirementStatus.COMPLIANT: 1,
    RequirementStatus.EXEMPTED: 1,  # not applicable counts as satisfied
    RequirementStatus.PARTIALLY_COMPLIANT: 0.5,
    RequirementStatus.NON_COMPLIANT: 0,
}


def score_entries(checklist: Checklist) -> list[ScoreEntry]:
    """Derive scorer input from a mapped checklist."""
    return [
        ScoreEntry(
            requirement_id=r.requirement_id,
            status=r.status,
            criticality=r.criticality.value,
        )
        for r in checklist.requirements
    ]


def _coerce_entries(entries: Iterable[Any]) -> list[ScoreEntry]:
    result: list[ScoreEntry] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, ScoreEntry):
            result.append(entry)
            continue
        if isinstance(entry, BaseModel):
            entry = entry.model_dump(mode="json")
        try:
            result.append(ScoreEntry.model_validate(entry))
        except ValidationError as e:
            raise InputShapeError(f"Score entry #{index} is malformed: {e}") from e
    return result


def calculate_score(
    entries: Iterable[Any],
    weights: Optional[Mapping[str, float]] = None,
) -> int:
    """Weighted average of requirement statuses as a 0-100 integer.

    Pending entries are left out entirely. Unknown criticalities weigh 1.
    Returns 0 when nothing has been evaluated.
    """
    if weights is None:
        weights = CRITICALITY_WEIGHTS

    total_weighted = 0.0
    max_possible = 0.0

    for entry in _coerce_entries(entries):
        if entry.status == RequirementStatus.PENDING:
            continue
        weight = weights.get(entry.criticality or "") or 1
        total_weighted += STATUS_VALUES[entry.status] * weight
        max_possible += weight

    if max_possible <= 0:
        return 0
    # Half-up: 62.5 -> 63
    return int(math.floor(total_weighted / max_possible * 100 + 0.5))
