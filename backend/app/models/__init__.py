"""Database models."""

from backend.app.models.query import Query
from backend.app.models.report import Report

__all__ = ["Query", "Report"]
