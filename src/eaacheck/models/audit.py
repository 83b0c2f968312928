"""Audit finding data models (Lighthouse-style audit results)."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _text_or_none(value: Any) -> Any:
    return value if isinstance(value, str) else None


class FailingItem(BaseModel):
    """One failing element reported by an audit."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    node_label: Optional[str] = Field(default=None, alias="nodeLabel")
    selector: Optional[str] = None
    explanation: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_node(cls, data: Any) -> Any:
        # Lighthouse nests element info under "node"; empty top-level values count as missing
        if isinstance(data, dict) and isinstance(data.get("node"), dict):
            node = data["node"]
            merged = dict(data)
            for key in ("nodeLabel", "selector", "explanation"):
                if not merged.get(key) and node.get(key):
                    merged[key] = node[key]
            return merged
        return data

    @field_validator("node_label", "selector", "explanation", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _text_or_none(value)


class FindingDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    items: list[FailingItem] = []

    @field_validator("items", mode="before")
    @classmethod
    def _items_list(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, FailingItem))]


class AuditFinding(BaseModel):
    """A single audit result. Immutable once produced by the audit tool.

    Only the score decides how an audit tallies, so every other field is
    lenient: wrong-typed text becomes None and unusable details are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str = ""
    title: Optional[str] = None
    description: Optional[str] = None
    score: Optional[float] = None
    score_display_mode: Optional[str] = Field(default=None, alias="scoreDisplayMode")
    details: Optional[FindingDetails] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_text(cls, value: Any) -> Any:
        return value if isinstance(value, str) else ""

    @field_validator("title", "description", "score_display_mode", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _text_or_none(value)

    @field_validator("score", mode="before")
    @classmethod
    def _not_applicable(cls, value: Any) -> Any:
        # Anything that is not a plain number counts as "not applicable"
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    @field_validator("details", mode="before")
    @classmethod
    def _details_dict(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, FindingDetails)) else None

    @property
    def failing_items(self) -> list[FailingItem]:
        if self.details is None:
            return []
        return list(self.details.items)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
