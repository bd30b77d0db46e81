"""Metric DTOs — pure Pydantic, zero server imports."""
from __future__ import annotations
from pydantic import BaseModel
from findash.domain.categories import MetricCategory


class MetricRead(BaseModel):
    category: MetricCategory
    value: float
