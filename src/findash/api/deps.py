"""FastAPI dependencies."""
from __future__ import annotations
from fastapi import Request
from findash.config import Settings
from findash.services.dataset_service import DatasetService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dataset_service(request: Request) -> DatasetService:
    """Return the app-wide DatasetService built in the lifespan."""
    return request.app.state.dataset_service
