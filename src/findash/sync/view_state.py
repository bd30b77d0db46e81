"""Client-side view state: what each table and metric card currently shows.

Only the sync engine mutates these objects, and only from its event loop.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from findash.domain.categories import MetricCategory, RowCategory


class LoadState(str, Enum):
    EMPTY = "EMPTY"
    LOADING = "LOADING"
    LOADED = "LOADED"
    EXHAUSTED = "EXHAUSTED"
    FAILED = "FAILED"


def format_amount(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


@dataclass
class MetricSlot:
    category: MetricCategory
    value: float | None = None
    error: str | None = None
    retriable: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        if self.error is not None or self.value is None:
            return "unavailable"
        return format_amount(self.value)


@dataclass
class MetricsSnapshot:
    slots: dict[MetricCategory, MetricSlot]

    def __getitem__(self, category: MetricCategory) -> MetricSlot:
        return self.slots[MetricCategory(category)]

    @property
    def failed(self) -> list[MetricCategory]:
        return [c for c, s in self.slots.items() if not s.ok]


@dataclass
class TableSlot:
    category: RowCategory
    rendered: int = 0
    state: LoadState = LoadState.EMPTY
    total: int | None = None
    error: str | None = None
    retriable: bool = False
    # The live table body; replaced, never accumulated.
    container: Any = None

    @property
    def exhausted(self) -> bool:
        return self.state is LoadState.EXHAUSTED


@dataclass
class ViewState:
    tables: dict[RowCategory, TableSlot] = field(
        default_factory=lambda: {c: TableSlot(category=c) for c in RowCategory}
    )
    metrics: MetricsSnapshot | None = None

    def slot(self, category: RowCategory) -> TableSlot:
        return self.tables[RowCategory(category)]
