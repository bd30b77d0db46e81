"""Headless ``Renderer`` that keeps the view in plain Python objects.

Used by the CLI and handy anywhere a dashboard has to be synced without a
UI toolkit. Geometry is synthetic: every region gets a fixed slot on a
vertical strip and the view can be "scrolled" by setting ``scroll``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Sequence

from findash.domain.categories import MetricCategory, RowCategory
from findash.sync.rendering import Rect
from findash.sync.view_state import MetricSlot

REGION_WIDTH = 800.0
REGION_HEIGHT = 240.0


@dataclass(eq=False)
class MemoryRegion:
    name: str
    rect: Rect


@dataclass(eq=False)
class MemoryTable:
    category: RowCategory
    rows: list[dict[str, Any]] = field(default_factory=list)


@dataclass(eq=False)
class MemoryOverlay:
    rect: Rect
    attached: bool = True


class MemoryRenderer:
    def __init__(self) -> None:
        self.scroll: tuple[float, float] = (0.0, 0.0)
        self.mounted: dict[RowCategory, MemoryTable] = {}
        self.metrics: dict[MetricCategory, MetricSlot] = {}
        self.overlays: list[MemoryOverlay] = []
        self.attach_calls = 0
        self.mount_calls = 0

        names = [c.value for c in MetricCategory] + [c.value for c in RowCategory]
        self._regions = {
            name: MemoryRegion(name, Rect(top=i * REGION_HEIGHT, left=0.0,
                                          width=REGION_WIDTH, height=REGION_HEIGHT))
            for i, name in enumerate(names)
        }

    def table_region(self, category: RowCategory) -> MemoryRegion:
        return self._regions[RowCategory(category).value]

    def metric_region(self, category: MetricCategory) -> MemoryRegion:
        return self._regions[MetricCategory(category).value]

    def create_container(self, category: RowCategory) -> MemoryTable:
        return MemoryTable(category=category)

    def build_batch(self, category: RowCategory, records: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
        return [dict(r) for r in records]

    def attach_batch(self, container: MemoryTable, batch: list[dict[str, Any]]) -> None:
        self.attach_calls += 1
        container.rows.extend(batch)

    def mount(self, category: RowCategory, container: MemoryTable) -> None:
        self.mount_calls += 1
        self.mounted[category] = container

    def render_metric(self, slot: MetricSlot) -> None:
        self.metrics[slot.category] = slot

    def get_bounding_rect(self, element: MemoryRegion) -> Rect:
        # Viewport-relative, like a browser's getBoundingClientRect().
        return element.rect.shifted(-self.scroll[0], -self.scroll[1])

    def scroll_offset(self) -> tuple[float, float]:
        return self.scroll

    def create_overlay(self, rect: Rect) -> MemoryOverlay:
        overlay = MemoryOverlay(rect)
        self.overlays.append(overlay)
        return overlay

    def detach(self, element: MemoryOverlay) -> None:
        element.attached = False
        self.overlays.remove(element)
