"""Dataset categories served by the generator and consumed by the dashboard."""
from __future__ import annotations
from enum import Enum


class MetricCategory(str, Enum):
    DEPOSITS = "deposits"
    DIVIDENDS = "dividends"
    GAINS = "gains"


class RowCategory(str, Enum):
    OPERATIONS = "operations"
    USERS = "users"
