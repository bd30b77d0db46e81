"""Shared test fixtures.

  test_settings: small, fast settings: thread pool, trivial metric work.
  app: FastAPI app built from test_settings (lifespan not started).
  client: FastAPI TestClient around ``app`` (lifespan started).
"""
import pytest

from findash.config import Settings


@pytest.fixture
def test_settings():
    return Settings(
        MAX_ROWS=500,
        PAGE_SIZE=100,
        DEFAULT_ROWS=20,
        METRIC_EXECUTOR="thread",
        METRIC_WORKERS=4,
        METRIC_WORK_UNITS=1_000,
        METRIC_CACHE_TTL=0.0,
        GZIP_MIN_SIZE=500,
    )


@pytest.fixture
def app(test_settings):
    from findash.api.app import create_app
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """FastAPI TestClient with the worker pool running."""
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c
