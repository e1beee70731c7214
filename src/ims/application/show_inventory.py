"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from ims.application.dto import ItemDTO
from ims.domain.model.inventory import DEFAULT_LOW_STOCK_THRESHOLD, Category
from ims.domain.repository.pagination import Page, paginate
from ims.domain.repository.inventory_repository import InventoryRepository


class ShowInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        per_page: int = 10,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._low_stock_threshold = low_stock_threshold
        self._per_page = per_page

    def handle(
        self,
        category: str | None = None,
        search: str | None = None,
        page: int = 1,
    ) -> Page[ItemDTO]:
        items = self._inventory_repo.search(
            category=Category.parse(category) if category else None,
            text=search,
        )
        items.sort(key=lambda i: i.created_at, reverse=True)
        result = paginate(items, page, self._per_page)
        return Page(
            items=[ItemDTO.from_item(i, self._low_stock_threshold) for i in result.items],
            page=result.page,
            per_page=result.per_page,
            total=result.total,
        )
