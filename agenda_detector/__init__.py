"""Agenda Detector: LLM-backed analysis of public statements."""

__version__ = "0.1.0"
