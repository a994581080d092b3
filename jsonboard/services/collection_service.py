"""List/get/create/patch/soft-delete use cases for one named collection."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from jsonboard.domain.items import format_item, prepare_new_item
from jsonboard.repositories.json_storage import JsonStore, StoreError

logger = logging.getLogger(__name__)


class CollectionError(Exception):
    """Base exception for collection workflows."""


class ItemNotFoundError(CollectionError):
    """Raised when no item of the collection carries the requested id."""

    def __init__(self, label: str, item_id: str) -> None:
        super().__init__(f"{label} not found")
        self.label = label
        self.item_id = item_id


class CollectionService:
    """Operates on `db[name]`; every response item goes through the soft-delete formatter."""

    def __init__(self, store: JsonStore, name: str, label: str) -> None:
        self.store = store
        self.name = name
        self.label = label

    def _items(self, db: dict) -> list:
        items = db.get(self.name)
        if not isinstance(items, list):
            raise StoreError(f"Collection '{self.name}' is not a list")
        return items

    def _find(self, items: list, item_id: str) -> Optional[dict]:
        for item in items:
            if isinstance(item, dict) and item.get("id") == item_id:
                return item
        return None

    def list_items(self) -> list:
        items = self._items(self.store.read())
        return [format_item(item) for item in items]

    def get_item(self, item_id: str) -> dict:
        item = self._find(self._items(self.store.read()), item_id)
        if item is None:
            raise ItemNotFoundError(self.label, item_id)
        return format_item(item)

    def create_item(self, fields: Mapping[str, Any]) -> dict:
        with self.store.transaction() as db:
            items = self._items(db)
            item = prepare_new_item(items, fields)
            items.append(item)
        logger.info("Created %s %s", self.label.lower(), item["id"])
        return format_item(item)

    def patch_item(self, item_id: str, fields: Mapping[str, Any]) -> dict:
        """Shallow-merge every field onto the stored item, `id` and `isDeleted` included."""
        with self.store.transaction() as db:
            item = self._find(self._items(db), item_id)
            if item is None:
                raise ItemNotFoundError(self.label, item_id)
            item.update(fields)
        return format_item(item)

    def soft_delete(self, item_id: str) -> str:
        with self.store.transaction() as db:
            item = self._find(self._items(db), item_id)
            if item is None:
                raise ItemNotFoundError(self.label, item_id)
            item["isDeleted"] = True
        logger.info("Soft deleted %s %s", self.label.lower(), item_id)
        return f"{self.label} soft deleted"
