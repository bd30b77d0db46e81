"""Metric endpoints."""
from fastapi import APIRouter, Depends
from findash.api.deps import get_dataset_service
from findash.api.schemas.metrics import MetricRead
from findash.services.dataset_service import DatasetService

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("/{category}", response_model=MetricRead)
async def get_metric(
    category: str, service: DatasetService = Depends(get_dataset_service),
) -> MetricRead:
    return await service.get_metric(category)
