"""Notestage - domain-aware note resolution and rendering."""

__version__ = "0.1.0"
