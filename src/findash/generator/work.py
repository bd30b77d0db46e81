"""CPU-bound metric computation.

Functions here run inside the worker pool, possibly in another process, so
they take and return plain picklable values and touch no shared state.
"""
from __future__ import annotations
import random

# Per-category base amounts the synthetic value fluctuates around.
METRIC_BASE: dict[str, float] = {
    "deposits": 1_250_000.0,
    "dividends": 48_000.0,
    "gains": 310_000.0,
}

_MODULUS = 1_000_003


def burn(units: int) -> int:
    """Run ``units`` rounds of integer arithmetic and return the checksum."""
    acc = 0
    for i in range(units):
        acc = (acc * 31 + i) % _MODULUS
    return acc


def compute_metric(category: str, units: int, seed: int) -> float:
    """Return the synthetic value for ``category`` after ``units`` of work."""
    checksum = burn(units)
    rng = random.Random(f"{seed}:{category}:{checksum}")
    base = METRIC_BASE[category]
    return round(base * rng.uniform(0.8, 1.2), 2)
