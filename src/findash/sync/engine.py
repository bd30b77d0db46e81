"""Dashboard sync engine.

Pulls metric values and table pages from the API and merges them into a
``ViewState`` through a ``Renderer``:

* the three metrics are fetched concurrently and published together;
* each table grows one page at a time, one batch attachment per page;
* ``refresh`` swaps in a brand-new container holding the first page;
* at most one fetch per table is in flight, tables load independently.

API failures end up in the affected metric or table slot, never as an
exception out of the public coroutines.
"""
from __future__ import annotations
import asyncio
import logging
from functools import partial
from typing import Any, Awaitable, Protocol

from findash.api.schemas.metrics import MetricRead
from findash.api.schemas.rows import RowPage
from findash.config import settings
from findash.domain.categories import MetricCategory, RowCategory
from findash.sync.errors import APIError
from findash.sync.overlay import OverlayManager
from findash.sync.rendering import Renderer
from findash.sync.view_state import LoadState, MetricSlot, MetricsSnapshot, TableSlot, ViewState

logger = logging.getLogger(__name__)


class DatasetSource(Protocol):
    async def get_metric(self, category: MetricCategory) -> MetricRead: ...
    async def get_rows(self, category: RowCategory, rows: int, offset: int = 0) -> RowPage: ...


class DashboardSyncEngine:
    def __init__(
        self,
        source: DatasetSource,
        renderer: Renderer,
        view: ViewState | None = None,
        *,
        page_size: int | None = None,
    ) -> None:
        if page_size is None:
            page_size = settings.PAGE_SIZE
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._source = source
        self._renderer = renderer
        self.view = view if view is not None else ViewState()
        self.page_size = page_size
        self.overlays = OverlayManager(renderer)
        self._inflight: dict[RowCategory, asyncio.Task] = {}

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    async def load_metrics(self) -> MetricsSnapshot:
        """Fetch all metrics concurrently; publish once every slot has settled."""
        slots = await asyncio.gather(*(self._load_metric(c) for c in MetricCategory))
        snapshot = MetricsSnapshot(slots={s.category: s for s in slots})
        self.view.metrics = snapshot
        for slot in slots:
            self._renderer.render_metric(slot)
        return snapshot

    async def _load_metric(self, category: MetricCategory) -> MetricSlot:
        with self.overlays.covering(self._renderer.metric_region(category)):
            try:
                metric = await self._source.get_metric(category)
            except APIError as exc:
                logger.warning("Metric %s failed: %s", category.value, exc)
                return MetricSlot(category=category, error=exc.detail, retriable=exc.retriable)
        return MetricSlot(category=category, value=metric.value)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    async def load_more(self, category: RowCategory) -> TableSlot:
        """Append the next page to ``category``'s table.

        Joins the in-flight fetch instead of issuing a second one, and does
        nothing once the table is exhausted.
        """
        category = RowCategory(category)
        slot = self.view.slot(category)
        pending = self._inflight.get(category)
        if pending is not None:
            logger.debug("load_more(%s) joined the in-flight fetch", category.value)
            return await asyncio.shield(pending)
        if slot.exhausted:
            return slot
        return await self._start(category, self._append_page(slot))

    async def refresh(self, category: RowCategory) -> TableSlot:
        """Replace ``category``'s table with a new container holding the first page."""
        category = RowCategory(category)
        pending = self._inflight.get(category)
        while pending is not None:
            await asyncio.wait({pending})
            pending = self._inflight.get(category)
        return await self._start(category, self._replace_with_first_page(self.view.slot(category)))

    async def load_dashboard(self) -> None:
        """Initial load: metrics and the first page of every table, all at once."""
        await asyncio.gather(
            self.load_metrics(),
            *(self.load_more(c) for c in RowCategory),
        )

    async def _start(self, category: RowCategory, work: Awaitable[TableSlot]) -> TableSlot:
        task = asyncio.ensure_future(work)
        self._inflight[category] = task
        task.add_done_callback(partial(self._forget, category))
        return await asyncio.shield(task)

    def _forget(self, category: RowCategory, task: asyncio.Task) -> None:
        if self._inflight.get(category) is task:
            del self._inflight[category]

    async def _fetch_page(self, slot: TableSlot, offset: int) -> RowPage | None:
        previous = (slot.state, slot.error, slot.retriable)
        slot.state = LoadState.LOADING
        slot.error = None
        slot.retriable = False
        with self.overlays.covering(self._renderer.table_region(slot.category)):
            try:
                return await self._source.get_rows(slot.category, rows=self.page_size, offset=offset)
            except APIError as exc:
                logger.warning("Loading %s at offset %d failed: %s", slot.category.value, offset, exc)
                slot.state = LoadState.FAILED
                slot.error = exc.detail
                slot.retriable = exc.retriable
                return None
            except asyncio.CancelledError:
                slot.state, slot.error, slot.retriable = previous
                raise
            except Exception as exc:
                logger.exception("Loading %s at offset %d crashed", slot.category.value, offset)
                slot.state = LoadState.FAILED
                slot.error = str(exc) or type(exc).__name__
                raise

    async def _append_page(self, slot: TableSlot) -> TableSlot:
        page = await self._fetch_page(slot, offset=slot.rendered)
        if page is None:
            return slot

        container = slot.container
        fresh = container is None
        if fresh:
            container = self._renderer.create_container(slot.category)
        self._attach(slot.category, container, page)
        if fresh:
            self._renderer.mount(slot.category, container)
            slot.container = container

        self._settle(slot, slot.rendered + len(page.records), page)
        return slot

    async def _replace_with_first_page(self, slot: TableSlot) -> TableSlot:
        page = await self._fetch_page(slot, offset=0)
        if page is None:
            return slot

        container = self._renderer.create_container(slot.category)
        self._attach(slot.category, container, page)
        # Old container is dropped as a whole, not emptied first.
        self._renderer.mount(slot.category, container)
        slot.container = container

        self._settle(slot, len(page.records), page)
        return slot

    def _attach(self, category: RowCategory, container: Any, page: RowPage) -> None:
        if not page.records:
            return
        batch = self._renderer.build_batch(category, page.records)
        self._renderer.attach_batch(container, batch)

    def _settle(self, slot: TableSlot, rendered: int, page: RowPage) -> None:
        slot.rendered = rendered
        slot.total = page.total
        if len(page.records) < self.page_size or rendered >= page.total:
            slot.state = LoadState.EXHAUSTED
        else:
            slot.state = LoadState.LOADED
