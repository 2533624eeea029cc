"""Grading API - HTTP service for server-side answer validation."""

__version__ = "0.1.0"
