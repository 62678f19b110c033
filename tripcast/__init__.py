"""Tripcast: trip planner and weather lookup API."""

__version__ = "0.1.0"
