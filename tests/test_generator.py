"""Unit tests for record synthesis, metric work and the worker pool."""
import asyncio

import pytest

from findash.domain.categories import MetricCategory, RowCategory
from findash.domain.exceptions import DatasetValidationError, NotFoundError
from findash.generator.pool import WorkerPool
from findash.generator.records import generate_rows
from findash.generator.work import burn, compute_metric
from findash.services.dataset_service import DatasetService


def test_records_are_deterministic_per_index():
    a = generate_rows(RowCategory.USERS, 10, 5, seed=3)
    b = generate_rows(RowCategory.USERS, 12, 3, seed=3)
    assert a[2:] == b


def test_records_differ_across_seeds():
    assert generate_rows(RowCategory.OPERATIONS, 0, 5, seed=1) != generate_rows(
        RowCategory.OPERATIONS, 0, 5, seed=2
    )


def test_record_ids_follow_offset():
    rows = generate_rows(RowCategory.OPERATIONS, 40, 3, seed=1)
    assert [r["id"] for r in rows] == [41, 42, 43]


def test_outgoing_operations_are_negative():
    rows = generate_rows(RowCategory.OPERATIONS, 0, 200, seed=1)
    for r in rows:
        if r["category"] in ("withdrawal", "fee"):
            assert r["amount"] < 0
        else:
            assert r["amount"] > 0


def test_burn_is_deterministic():
    assert burn(10_000) == burn(10_000)
    assert burn(0) == 0


def test_compute_metric_stays_near_base():
    value = compute_metric("deposits", 1_000, seed=7)
    assert 1_000_000 <= value <= 1_500_000
    assert compute_metric("deposits", 1_000, seed=7) == value


def test_worker_pool_requires_start():
    pool = WorkerPool(kind="thread", workers=1)
    with pytest.raises(RuntimeError):
        asyncio.run(pool.run(burn, 10))


@pytest.mark.parametrize("kind", ["thread", "process"])
def test_worker_pool_runs_work(kind):
    pool = WorkerPool(kind=kind, workers=2)
    pool.start()
    try:
        result = asyncio.run(pool.run(burn, 5_000))
    finally:
        pool.shutdown()
    assert result == burn(5_000)
    assert not pool.started


def _service(test_settings):
    pool = WorkerPool(kind="thread", workers=1)
    return DatasetService(pool, test_settings), pool


def test_service_rejects_negative_rows(test_settings):
    service, _ = _service(test_settings)
    with pytest.raises(DatasetValidationError):
        service.get_rows(RowCategory.USERS, rows=-1)


def test_service_rejects_negative_offset(test_settings):
    service, _ = _service(test_settings)
    with pytest.raises(DatasetValidationError):
        service.get_rows(RowCategory.USERS, rows=5, offset=-1)


def test_service_accepts_category_names(test_settings):
    service, _ = _service(test_settings)
    page = service.get_rows("users", rows=3)
    assert page.category is RowCategory.USERS
    assert len(page.records) == 3


def test_service_unknown_category(test_settings):
    service, _ = _service(test_settings)
    with pytest.raises(NotFoundError):
        service.get_rows("accounts", rows=3)


def test_service_metric_uses_pool(test_settings):
    service, pool = _service(test_settings)
    pool.start()
    try:
        metric = asyncio.run(service.get_metric(MetricCategory.GAINS))
    finally:
        pool.shutdown()
    assert metric.category is MetricCategory.GAINS
    assert metric.value == compute_metric("gains", test_settings.METRIC_WORK_UNITS, test_settings.DATA_SEED)
