"""Quark coalescence model: parton combiners, hadron identification, event I/O and analysis."""

__version__ = "0.1.0"