"""Loading overlays positioned over dashboard regions."""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Iterator

from findash.sync.rendering import Rect, Renderer

_ids = count(1)


@dataclass(eq=False)
class OverlayHandle:
    rect: Rect
    element: Any = None
    id: int = field(default_factory=lambda: next(_ids))

    @property
    def active(self) -> bool:
        return self.element is not None


class OverlayManager:
    """Shows and dismisses loading indicators through a ``Renderer``.

    Geometry comes from one ``get_bounding_rect`` call on the target,
    shifted by the current scroll offset into page coordinates.
    """

    def __init__(self, renderer: Renderer) -> None:
        self._renderer = renderer
        self._active: dict[int, OverlayHandle] = {}

    @property
    def active(self) -> list[OverlayHandle]:
        return list(self._active.values())

    def show(self, target: Any) -> OverlayHandle:
        viewport_rect = self._renderer.get_bounding_rect(target)
        scroll_x, scroll_y = self._renderer.scroll_offset()
        rect = viewport_rect.shifted(scroll_x, scroll_y)
        handle = OverlayHandle(rect=rect, element=self._renderer.create_overlay(rect))
        self._active[handle.id] = handle
        return handle

    def dismiss(self, handle: OverlayHandle) -> None:
        """Detach the overlay. Dismissing an inactive handle does nothing."""
        if handle.element is None:
            return
        element, handle.element = handle.element, None
        self._active.pop(handle.id, None)
        self._renderer.detach(element)

    @contextmanager
    def covering(self, target: Any) -> Iterator[OverlayHandle]:
        handle = self.show(target)
        try:
            yield handle
        finally:
            self.dismiss(handle)
