"""Dataset generation use-case service."""
from __future__ import annotations
import time
from enum import Enum
from typing import TypeVar
from findash.config import Settings
from findash.domain.categories import MetricCategory, RowCategory
from findash.domain.exceptions import DatasetValidationError, NotFoundError
from findash.generator.pool import WorkerPool
from findash.generator.records import generate_rows
from findash.generator.work import compute_metric
from findash.logging import logger
from findash.api.schemas.metrics import MetricRead
from findash.api.schemas.rows import RowPage

E = TypeVar("E", bound=Enum)


def _resolve(enum_cls: type[E], value: E | str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise NotFoundError(f"Unknown dataset {value!r}") from None


class DatasetService:
    """Synthesizes metric values and row pages.

    Metric values are computed in the worker pool; with ``METRIC_CACHE_TTL``
    set, a computed value is reused until it expires. Row pages are cheap
    and built inline.
    """

    def __init__(self, pool: WorkerPool, settings: Settings) -> None:
        self._pool = pool
        self._settings = settings
        self._cache: dict[MetricCategory, tuple[float, float]] = {}

    async def get_metric(self, category: MetricCategory | str) -> MetricRead:
        category = _resolve(MetricCategory, category)
        ttl = self._settings.METRIC_CACHE_TTL
        if ttl > 0:
            cached = self._cache.get(category)
            if cached is not None and cached[0] > time.monotonic():
                return MetricRead(category=category, value=cached[1])

        started = time.perf_counter()
        value = await self._pool.run(
            compute_metric, category.value,
            self._settings.METRIC_WORK_UNITS, self._settings.DATA_SEED,
        )
        logger.info("Computed %s in %.2fs", category.value, time.perf_counter() - started)

        if ttl > 0:
            self._cache[category] = (time.monotonic() + ttl, value)
        return MetricRead(category=category, value=value)

    def get_rows(
        self, category: RowCategory | str, rows: int | None = None, offset: int = 0,
    ) -> RowPage:
        category = _resolve(RowCategory, category)
        if rows is None:
            rows = self._settings.DEFAULT_ROWS
        if rows < 0:
            raise DatasetValidationError(f"rows must be >= 0, got {rows}")
        if offset < 0:
            raise DatasetValidationError(f"offset must be >= 0, got {offset}")

        cap = self._settings.MAX_ROWS
        count = max(0, min(rows, cap - offset))
        records = generate_rows(category, offset, count, self._settings.DATA_SEED)
        return RowPage(category=category, offset=offset, total=cap, records=records)
