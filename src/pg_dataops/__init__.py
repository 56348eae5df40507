"""Structured PostgreSQL data operations with safety guardrails."""

__version__ = "0.1.0"
