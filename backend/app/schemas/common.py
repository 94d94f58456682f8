from __future__ import annotations

import math

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")
    has_next: bool = Field(alias="hasNext")
    has_prev: bool = Field(alias="hasPrev")

    model_config = {"populate_by_name": True}

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        offset = (page - 1) * limit
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
            has_next=offset + limit < total,
            has_prev=page > 1,
        )
