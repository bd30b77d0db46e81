"""Synthetic row records for the operations and users tables.

Each record depends only on ``(category, index, seed)`` so separately
fetched pages of the same dataset line up.
"""
from __future__ import annotations
import random
from datetime import date, timedelta
from typing import Any, Callable

from findash.domain.categories import RowCategory

Record = dict[str, Any]

_EPOCH = date(2020, 1, 1)

_OPERATION_KINDS = ["deposit", "withdrawal", "dividend", "transfer", "fee"]
_OPERATION_STATUSES = ["completed", "pending", "failed"]
_FIRST_NAMES = ["Ada", "Grace", "Alan", "Edsger", "Barbara", "Ken", "Donald", "Frances", "Linus", "Radia"]
_LAST_NAMES = ["Lovelace", "Hopper", "Turing", "Dijkstra", "Liskov", "Thompson", "Knuth", "Allen", "Torvalds", "Perlman"]
_COUNTRIES = ["US", "GB", "DE", "FR", "JP", "BR", "CA", "IN"]


def _rng(category: RowCategory, index: int, seed: int) -> random.Random:
    return random.Random(f"{seed}:{category.value}:{index}")


def make_operation(index: int, seed: int) -> Record:
    rng = _rng(RowCategory.OPERATIONS, index, seed)
    kind = rng.choice(_OPERATION_KINDS)
    amount = round(rng.uniform(5, 25_000), 2)
    if kind in ("withdrawal", "fee"):
        amount = -amount
    return {
        "id": index + 1,
        "date": (_EPOCH + timedelta(days=rng.randrange(0, 2000))).isoformat(),
        "description": f"{kind.title()} #{rng.randrange(10_000, 99_999)}",
        "category": kind,
        "amount": amount,
        "status": rng.choice(_OPERATION_STATUSES),
    }


def make_user(index: int, seed: int) -> Record:
    rng = _rng(RowCategory.USERS, index, seed)
    first = rng.choice(_FIRST_NAMES)
    last = rng.choice(_LAST_NAMES)
    return {
        "id": index + 1,
        "name": f"{first} {last}",
        "email": f"{first.lower()}.{last.lower()}{index + 1}@example.com",
        "country": rng.choice(_COUNTRIES),
        "joined": (_EPOCH + timedelta(days=rng.randrange(0, 2000))).isoformat(),
        "balance": round(rng.uniform(0, 150_000), 2),
    }


_FACTORIES: dict[RowCategory, Callable[[int, int], Record]] = {
    RowCategory.OPERATIONS: make_operation,
    RowCategory.USERS: make_user,
}


def generate_rows(category: RowCategory, offset: int, count: int, seed: int) -> list[Record]:
    """Return records ``offset .. offset + count - 1`` of ``category``."""
    factory = _FACTORIES[category]
    return [factory(i, seed) for i in range(offset, offset + count)]
