"""
Regras do catálogo de produtos, independentes de HTTP

ProductCatalog recebe o store por injeção; cada operação valida a entrada,
resolve o identificador e delega a persistência ao store.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4
import logging

from pydantic import ValidationError as PydanticValidationError

from infra.store import ProductStore, StoreError, looks_like_store_id
from schemas.products import ProductIn
from services.errors import InternalError, NotFoundError, ValidationError

log = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Produtos de exemplo carregados com SEED_SAMPLE_PRODUCTS=true
SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


def validate_product(payload: Any) -> ProductIn:
    """Dá raise ValidationError("Invalid product data") se o payload for inválido"""
    if not isinstance(payload, dict):
        raise ValidationError("Invalid product data")
    try:
        return ProductIn.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("Invalid product data")


def parse_positive_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProductCatalog:
    def __init__(self, store: ProductStore):
        self.store = store

    def _resolve(self, identifier: str) -> Dict[str, Any]:
        """
        Busca pelo id de negócio; se não achar e o valor tiver formato de id do store,
        tenta pelo _id. Dá raise NotFoundError se nenhum dos caminhos encontrar
        """
        item = self.store.get_by_id(identifier)
        if item is None and looks_like_store_id(identifier):
            item = self.store.get_by_store_id(identifier)
        if item is None:
            raise NotFoundError("Product not found")
        return item

    def list_products(
        self,
        category: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> Dict[str, Any]:
        page_n = parse_positive_int(page, DEFAULT_PAGE)
        limit_n = parse_positive_int(limit, DEFAULT_LIMIT)
        offset = (page_n - 1) * limit_n

        matching = self._call(self.store.find, category=category or None)
        return {
            "total": len(matching),
            "page": page_n,
            "limit": limit_n,
            "products": matching[offset:offset + limit_n],
        }

    def search(self, query: Optional[str]) -> List[Dict[str, Any]]:
        if not query:
            raise ValidationError("Search query is required")
        return self._call(self.store.find, name_contains=query)

    def get(self, identifier: str) -> Dict[str, Any]:
        return self._call(self._resolve, identifier)

    def create(self, payload: Any) -> Dict[str, Any]:
        data = validate_product(payload)
        item = {"id": str(uuid4()), **data.model_dump(), "createdAt": _now()}
        created = self._call(self.store.create, item)
        log.info("Produto criado id=%s _id=%s", created["id"], created["_id"])
        return created

    def update(self, identifier: str, payload: Any) -> Dict[str, Any]:
        data = validate_product(payload)
        current = self._call(self._resolve, identifier)
        updated = self._call(self.store.update, current["_id"], data.model_dump())
        if updated is None:
            # removido entre a busca e o update
            raise NotFoundError("Product not found")
        log.info("Produto atualizado id=%s", updated["id"])
        return updated

    def delete(self, identifier: str) -> None:
        current = self._call(self._resolve, identifier)
        if not self._call(self.store.delete, current["_id"]):
            raise NotFoundError("Product not found")
        log.info("Produto removido id=%s", current["id"])

    def stats(self) -> Dict[str, Any]:
        return {
            "totalProducts": self._call(self.store.count),
            "categories": self._call(self.store.count_by_category),
        }

    def seed(self, products: List[Dict[str, Any]] = SAMPLE_PRODUCTS) -> int:
        """Carrega produtos de exemplo apenas se o catálogo estiver vazio"""
        if self._call(self.store.count) > 0:
            return 0
        for product in products:
            self._call(self.store.create, {**product, "createdAt": _now()})
        log.info("Catálogo populado com %d produtos de exemplo", len(products))
        return len(products)

    @staticmethod
    def _call(fn, *args, **kwargs):
        # falhas do driver viram InternalError; erros do catálogo passam direto
        try:
            return fn(*args, **kwargs)
        except StoreError as exc:
            raise InternalError() from exc
