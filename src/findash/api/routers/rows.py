"""Row dataset endpoints."""
from fastapi import APIRouter, Depends, Query
from findash.api.deps import get_dataset_service
from findash.api.schemas.rows import RowPage
from findash.services.dataset_service import DatasetService

router = APIRouter(prefix="/rows", tags=["rows"])


@router.get("/{category}", response_model=RowPage)
def get_rows(
    category: str,
    rows: int | None = Query(default=None, ge=0),
    offset: int = Query(default=0, ge=0),
    service: DatasetService = Depends(get_dataset_service),
) -> RowPage:
    return service.get_rows(category, rows=rows, offset=offset)
