"""Execution model, task behaviors and state recording for process flows."""

__version__ = "0.1.0"