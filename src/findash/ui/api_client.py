"""Typed async HTTP client for the dashboard.

Only imports DTOs from ``findash.api.schemas`` and ``APIError`` from
``findash.sync.errors`` — never services, never the generator.
Use as an async context manager so the connection pool is closed with the
event loop that opened it.
"""
from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from findash.api.schemas.dashboard import DashboardConfig
from findash.api.schemas.metrics import MetricRead
from findash.api.schemas.rows import RowPage
from findash.domain.categories import MetricCategory, RowCategory
from findash.sync.errors import APIError

__all__ = ["APIError", "FinDashClient"]

_DEFAULT_BASE_URL = "http://127.0.0.1:8000"
_DEFAULT_TIMEOUT = 30.0

ModelT = TypeVar("ModelT", bound=BaseModel)


class FinDashClient:
    """One method per backend endpoint.  All return pure Pydantic DTOs."""

    def __init__(
        self,
        base_url: str = _DEFAULT_BASE_URL,
        *,
        timeout: float = _DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=httpx.Timeout(timeout), transport=transport,
        )

    async def __aenter__(self) -> "FinDashClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            resp = await self._client.get(url, params=params)
        except httpx.TimeoutException as exc:
            raise APIError(None, f"request to {url} timed out", retriable=True) from exc
        except httpx.RequestError as exc:
            # Connection failures and undecodable (e.g. corrupt gzip) bodies.
            raise APIError(None, f"request to {url} failed: {exc}", retriable=True) from exc
        self._raise_for_status(resp)
        return resp

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            body = resp.json()
        except ValueError:
            body = None
        detail = body.get("detail", resp.text) if isinstance(body, dict) else resp.text
        raise APIError(resp.status_code, str(detail), retriable=resp.status_code >= 500)

    def _json(self, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise APIError(
                None, f"{resp.request.url.path} returned a malformed body", retriable=True,
            ) from exc

    def _parse(self, resp: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate(self._json(resp))
        except ValidationError as exc:
            raise APIError(
                resp.status_code, f"{resp.request.url.path} returned an unexpected payload: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    async def get_metric(self, category: MetricCategory) -> MetricRead:
        resp = await self._get(f"/metrics/{MetricCategory(category).value}")
        return self._parse(resp, MetricRead)

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    async def get_rows(self, category: RowCategory, rows: int, offset: int = 0) -> RowPage:
        resp = await self._get(
            f"/rows/{RowCategory(category).value}", params={"rows": rows, "offset": offset},
        )
        return self._parse(resp, RowPage)

    # ------------------------------------------------------------------
    # Config / Health
    # ------------------------------------------------------------------

    async def get_config(self) -> DashboardConfig:
        resp = await self._get("/config")
        return self._parse(resp, DashboardConfig)

    async def health(self) -> dict:
        resp = await self._get("/health")
        return self._json(resp)
