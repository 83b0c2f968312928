"""Error types shared across the pipeline."""

from __future__ import annotations


class InputShapeError(ValueError):
    """Raised when a checklist, audit or score input is missing required structure."""
