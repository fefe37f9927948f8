"""
Store em memória, usado quando não há DynamoDB configurado (e nos testes)
Cada instância tem seu próprio estado; nada é global
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import copy
import logging
import threading

from infra.store import ProductStore, new_store_id

log = logging.getLogger(__name__)


class InMemoryProductStore(ProductStore):

    def __init__(self):
        # dict preserva ordem de inserção == ordem de criação
        self._items: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def create(self, item: Dict[str, Any]) -> Dict[str, Any]:
        db_item = dict(item)
        db_item["_id"] = new_store_id()
        with self._lock:
            self._items[db_item["_id"]] = db_item
        log.debug("Creating product item: id=%s _id=%s", db_item.get("id"), db_item["_id"])
        return copy.deepcopy(db_item)

    def find(self, category: Optional[str] = None, name_contains: Optional[str] = None) -> List[Dict[str, Any]]:
        with self._lock:
            items = list(self._items.values())
        if category is not None:
            items = [it for it in items if it["category"].lower() == category.lower()]
        if name_contains is not None:
            items = [it for it in items if name_contains.lower() in it["name"].lower()]
        return copy.deepcopy(items)

    def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            found = next((it for it in self._items.values() if it.get("id") == product_id), None)
        return copy.deepcopy(found)

    def get_by_store_id(self, store_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._items.get(store_id))

    def update(self, store_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            item = self._items.get(store_id)
            if item is None:
                return None
            item.update(updates)
            return copy.deepcopy(item)

    def delete(self, store_id: str) -> bool:
        with self._lock:
            return self._items.pop(store_id, None) is not None
