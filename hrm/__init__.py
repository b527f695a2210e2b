"""Omyra HRM — headless HR administration client."""

__version__ = "1.0.0"
