"""Pre-flight validation for the dashboard.

No services, no generator — uses the API client for backend checks.
"""
import asyncio
from typing import List


async def _fetch_backend_state(base_url: str, timeout: float):
    from findash.ui.api_client import FinDashClient
    async with FinDashClient(base_url, timeout=timeout) as client:
        await client.health()
        return await client.get_config()


def validate_backend_connection(base_url: str | None = None) -> List[str]:
    """Validate that the API is reachable and agrees with the local page size."""
    from findash.config import settings
    errors = []
    try:
        config = asyncio.run(
            _fetch_backend_state(base_url or settings.API_URL, settings.REQUEST_TIMEOUT)
        )
    except Exception as e:
        errors.append(f"Backend connection failed: {e}")
        return errors

    if config.page_size != settings.PAGE_SIZE:
        errors.append(
            f"PAGE_SIZE mismatch: client uses {settings.PAGE_SIZE}, server reports {config.page_size}"
        )
    return errors


def validate_settings() -> List[str]:
    """Validate local settings that the Settings model cannot check on its own."""
    from findash.config import settings
    errors = []
    if settings.PAGE_SIZE > settings.MAX_ROWS > 0:
        errors.append(
            f"PAGE_SIZE ({settings.PAGE_SIZE}) exceeds MAX_ROWS ({settings.MAX_ROWS}); "
            "every table will exhaust on its first page"
        )
    if settings.REQUEST_TIMEOUT <= 0:
        errors.append("REQUEST_TIMEOUT must be positive")
    return errors

