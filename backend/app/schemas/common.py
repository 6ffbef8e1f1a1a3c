"""Shared schemas."""

import math

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Pagination metadata of a list response."""

    current: int = Field(..., description="Current page (1-based)")
    pages: int = Field(..., description="Total number of pages")
    total: int = Field(..., description="Total number of matching items")
    limit: int = Field(..., description="Page size")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, pages=math.ceil(total / limit), total=total, limit=limit)
