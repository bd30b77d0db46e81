"""Dashboard endpoints."""
from fastapi import APIRouter, Depends
from findash.api.deps import get_settings
from findash.api.schemas.dashboard import DashboardConfig
from findash.config import Settings

router = APIRouter(tags=["dashboard"])


@router.get("/config", response_model=DashboardConfig)
def get_config(settings: Settings = Depends(get_settings)) -> DashboardConfig:
    return DashboardConfig(
        max_rows=settings.MAX_ROWS,
        page_size=settings.PAGE_SIZE,
        default_rows=settings.DEFAULT_ROWS,
    )
