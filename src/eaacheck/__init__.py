"""eaacheck - map website audits onto European Accessibility Act requirements."""

__version__ = "1.0.0"
