"""Dashboard DTOs — pure Pydantic, zero server imports."""
from __future__ import annotations
from pydantic import BaseModel


class DashboardConfig(BaseModel):
    max_rows: int
    page_size: int
    default_rows: int
