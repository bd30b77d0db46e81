"""Row dataset DTOs — pure Pydantic, zero server imports."""
from __future__ import annotations
from pydantic import BaseModel, Field
from findash.domain.categories import RowCategory

# Dates travel as ISO strings.
RowValue = str | int | float


class RowPage(BaseModel):
    category: RowCategory
    offset: int = Field(ge=0)
    total: int = Field(ge=0)
    records: list[dict[str, RowValue]]
