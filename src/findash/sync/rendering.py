"""Interface the sync engine needs from a rendering layer.

The engine never touches widgets directly. A renderer hands out opaque
elements (regions, containers, overlays) and performs every view mutation.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from findash.domain.categories import MetricCategory, RowCategory


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    def shifted(self, dx: float, dy: float) -> "Rect":
        return Rect(self.top + dy, self.left + dx, self.width, self.height)


class Renderer(Protocol):
    # Stable regions overlays are positioned over.
    def table_region(self, category: RowCategory) -> Any: ...
    def metric_region(self, category: MetricCategory) -> Any: ...

    # Tables
    def create_container(self, category: RowCategory) -> Any: ...
    def build_batch(self, category: RowCategory, records: Sequence[dict[str, Any]]) -> Any: ...
    def attach_batch(self, container: Any, batch: Any) -> None: ...
    def mount(self, category: RowCategory, container: Any) -> None: ...

    # Metrics
    def render_metric(self, slot: Any) -> None: ...

    # Geometry and overlays
    def get_bounding_rect(self, element: Any) -> Rect: ...
    def scroll_offset(self) -> tuple[float, float]: ...
    def create_overlay(self, rect: Rect) -> Any: ...
    def detach(self, element: Any) -> None: ...
