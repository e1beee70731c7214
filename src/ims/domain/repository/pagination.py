"""Page-based slicing shared by the listing queries."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page) if self.per_page else 0


def paginate(rows: list[T], page: int, per_page: int) -> Page[T]:
    """Return page ``page`` (1-based; anything lower is treated as 1)."""
    page = max(page, 1)
    skip = (page - 1) * per_page
    return Page(items=rows[skip:skip + per_page], page=page, per_page=per_page, total=len(rows))
