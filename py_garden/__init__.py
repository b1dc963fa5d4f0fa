"""Deterministic flower garden layout with hidden pixel-font messages."""

__version__ = "0.1.0"
