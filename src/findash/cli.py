import asyncio
import sys
from pathlib import Path

import typer

from findash.config import settings
from findash.domain.categories import RowCategory
from findash.logging import logger, setup_logging

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main():
    """
    Finance dashboard CLI.
    """
    setup_logging()


@app.command(name="doctor")
def doctor(api_url: str | None = typer.Option(None, help="Override FINDASH_API_URL")):
    """
    Check configuration and backend health.
    """
    from findash.ui.validation import validate_backend_connection, validate_settings

    logger.info("Running doctor check...")
    base_url = api_url or settings.API_URL

    print("\n🩺 Finance Dashboard Doctor\n")

    # ── Environment ──────────────────────────────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Prefix: {sys.prefix}")

    # ── Configuration ────────────────────────────────────────────────────────
    print("\n[Configuration]")
    print(f"  MAX_ROWS:           {settings.MAX_ROWS}")
    print(f"  PAGE_SIZE:          {settings.PAGE_SIZE}")
    print(f"  DEFAULT_ROWS:       {settings.DEFAULT_ROWS}")
    print(f"  METRIC_EXECUTOR:    {settings.METRIC_EXECUTOR} x{settings.METRIC_WORKERS}")
    print(f"  METRIC_WORK_UNITS:  {settings.METRIC_WORK_UNITS:,}")
    print(f"  METRIC_CACHE_TTL:   {settings.METRIC_CACHE_TTL or 'disabled'}")
    print(f"  REQUEST_TIMEOUT:    {settings.REQUEST_TIMEOUT}s")

    failures = validate_settings()

    # ── Backend ──────────────────────────────────────────────────────────────
    print("\n[Backend]")
    backend_errors = validate_backend_connection(base_url)
    if backend_errors:
        print(f"  {base_url}  ❌ Unhealthy")
    else:
        print(f"  {base_url}  ✅ Reachable")
    failures.extend(backend_errors)

    print(f"\n{'─' * 50}")
    if failures:
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    print("All checks passed ✅\n")


@app.command(name="serve")
def serve(
    host: str = typer.Option("127.0.0.1"),
    port: int = typer.Option(8000),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "findash.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


@app.command(name="ui")
def ui():
    """Launch the Streamlit dashboard."""
    from streamlit.web import cli as stcli

    page = Path(__file__).parent / "ui" / "app.py"
    sys.argv = ["streamlit", "run", str(page)]
    sys.exit(stcli.main())


@app.command(name="metrics")
def metrics(api_url: str | None = typer.Option(None, help="Override FINDASH_API_URL")):
    """Fetch all metrics concurrently and print them."""
    from findash.sync.engine import DashboardSyncEngine
    from findash.sync.memory import MemoryRenderer
    from findash.ui.api_client import FinDashClient

    async def _run():
        async with FinDashClient(api_url or settings.API_URL, timeout=settings.REQUEST_TIMEOUT) as client:
            engine = DashboardSyncEngine(client, MemoryRenderer(), page_size=settings.PAGE_SIZE)
            return await engine.load_metrics()

    snapshot = asyncio.run(_run())
    for category, slot in snapshot.slots.items():
        marker = "✅" if slot.ok else "❌"
        print(f"{marker} {category.value:<10} {slot.display}")
    if snapshot.failed:
        raise typer.Exit(code=1)


@app.command(name="rows")
def rows(
    category: RowCategory,
    pages: int = typer.Option(1, min=1, help="Number of load-more calls"),
    api_url: str | None = typer.Option(None, help="Override FINDASH_API_URL"),
):
    """Page through a table with the sync engine."""
    from findash.sync.engine import DashboardSyncEngine
    from findash.sync.memory import MemoryRenderer
    from findash.ui.api_client import FinDashClient

    renderer = MemoryRenderer()

    async def _run():
        async with FinDashClient(api_url or settings.API_URL, timeout=settings.REQUEST_TIMEOUT) as client:
            engine = DashboardSyncEngine(client, renderer, page_size=settings.PAGE_SIZE)
            slot = None
            for _ in range(pages):
                slot = await engine.load_more(category)
                if slot.exhausted:
                    break
            return slot

    slot = asyncio.run(_run())
    table = renderer.mounted.get(category)
    for record in (table.rows[-5:] if table else []):
        print(record)
    print(f"\n{category.value}: {slot.rendered} rows rendered, state {slot.state.value}")
    if slot.error:
        print(f"❌ {slot.error}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
