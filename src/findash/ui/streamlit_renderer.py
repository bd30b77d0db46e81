"""``Renderer`` implementation on top of Streamlit placeholders.

Streamlit does not report client-side geometry, so region rectangles come
from the page grid laid out in ``DashboardLayout``; the page does not
scroll programmatically, so the scroll offset is always zero.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Sequence

import pandas as pd
import streamlit as st

from findash.domain.categories import MetricCategory, RowCategory
from findash.sync.rendering import Rect
from findash.sync.view_state import MetricSlot, ViewState

PAGE_WIDTH = 1200.0
METRIC_CARD_HEIGHT = 120.0
TABLE_HEIGHT = 420.0
GUTTER = 16.0

METRIC_LABELS = {
    MetricCategory.DEPOSITS: "Deposits",
    MetricCategory.DIVIDENDS: "Dividends",
    MetricCategory.GAINS: "Gains",
}
TABLE_LABELS = {
    RowCategory.OPERATIONS: "Operations",
    RowCategory.USERS: "Users",
}


@dataclass(eq=False)
class Region:
    name: str
    rect: Rect
    body: Any      # placeholder the content is drawn into
    overlay: Any   # placeholder the loading indicator is drawn into


class TableBody:
    """A table's rows, accumulated one batch at a time."""

    def __init__(self, category: RowCategory) -> None:
        self.category = category
        self.frame = pd.DataFrame()
        self.placeholder: Any = None

    def __len__(self) -> int:
        return len(self.frame)


class DashboardLayout:
    """Creates the page skeleton: a row of metric cards above the tables."""

    def __init__(self) -> None:
        self.metrics: dict[MetricCategory, Region] = {}
        self.tables: dict[RowCategory, Region] = {}

        card_width = (PAGE_WIDTH - GUTTER * (len(MetricCategory) - 1)) / len(MetricCategory)
        for i, (category, column) in enumerate(zip(MetricCategory, st.columns(len(MetricCategory)))):
            with column:
                body = st.empty()
                overlay = st.empty()
            self.metrics[category] = Region(
                name=category.value,
                rect=Rect(top=0.0, left=i * (card_width + GUTTER), width=card_width, height=METRIC_CARD_HEIGHT),
                body=body,
                overlay=overlay,
            )

        top = METRIC_CARD_HEIGHT + GUTTER
        for category in RowCategory:
            st.subheader(TABLE_LABELS[category])
            overlay = st.empty()
            body = st.empty()
            self.tables[category] = Region(
                name=category.value,
                rect=Rect(top=top, left=0.0, width=PAGE_WIDTH, height=TABLE_HEIGHT),
                body=body,
                overlay=overlay,
            )
            top += TABLE_HEIGHT + GUTTER

    def regions(self) -> list[Region]:
        return [*self.metrics.values(), *self.tables.values()]


class StreamlitRenderer:
    def __init__(self, layout: DashboardLayout) -> None:
        self._layout = layout

    def table_region(self, category: RowCategory) -> Region:
        return self._layout.tables[RowCategory(category)]

    def metric_region(self, category: MetricCategory) -> Region:
        return self._layout.metrics[MetricCategory(category)]

    # --- tables ---

    def create_container(self, category: RowCategory) -> TableBody:
        return TableBody(category)

    def build_batch(self, category: RowCategory, records: Sequence[dict[str, Any]]) -> pd.DataFrame:
        return pd.DataFrame.from_records(list(records))

    def attach_batch(self, container: TableBody, batch: pd.DataFrame) -> None:
        if container.frame.empty:
            container.frame = batch.reset_index(drop=True)
        else:
            container.frame = pd.concat([container.frame, batch], ignore_index=True)
        if container.placeholder is not None:
            container.placeholder.dataframe(container.frame, use_container_width=True)

    def mount(self, category: RowCategory, container: TableBody) -> None:
        region = self.table_region(category)
        container.placeholder = region.body
        region.body.dataframe(container.frame, use_container_width=True)

    # --- metrics ---

    def render_metric(self, slot: MetricSlot) -> None:
        region = self.metric_region(slot.category)
        label = METRIC_LABELS[slot.category]
        if slot.ok:
            region.body.metric(label, slot.display)
        else:
            region.body.error(f"{label}: {slot.display} ({slot.error})")

    def redraw(self, view: ViewState) -> None:
        """Draw whatever ``view`` already holds into this run's placeholders."""
        if view.metrics is not None:
            for slot in view.metrics.slots.values():
                self.render_metric(slot)
        for category, slot in view.tables.items():
            if slot.container is not None:
                self.mount(category, slot.container)

    # --- geometry / overlays ---

    def get_bounding_rect(self, element: Region) -> Rect:
        return element.rect

    def scroll_offset(self) -> tuple[float, float]:
        return (0.0, 0.0)

    def create_overlay(self, rect: Rect) -> Any:
        # Centre-point hit test: scroll-shifted rects need not compare equal.
        x = rect.left + rect.width / 2
        y = rect.top + rect.height / 2
        for region in self._layout.regions():
            r = region.rect
            if r.left <= x <= r.left + r.width and r.top <= y <= r.top + r.height:
                region.overlay.info(f"Loading {region.name}…")
                return region.overlay
        raise LookupError(f"No region at {rect}")

    def detach(self, element: Any) -> None:
        element.empty()
