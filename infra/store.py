"""
Interface de persistência de produtos

Os handlers recebem um ProductStore já construído (ver api/deps.get_store);
a escolha entre DynamoDB e memória acontece uma única vez no startup.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import re
import secrets

STORE_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


class StoreError(Exception):
    """Falha do driver de persistência (rede, tabela inexistente, etc)"""


def new_store_id() -> str:
    # 12 bytes em hex, mesmo formato de um ObjectId
    return secrets.token_hex(12)


def looks_like_store_id(value: str) -> bool:
    return bool(STORE_ID_PATTERN.match(value or ""))


class ProductStore(ABC):

    @abstractmethod
    def create(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Persiste o item, atribuindo `_id`. Retorna o item salvo."""

    @abstractmethod
    def find(self, category: Optional[str] = None, name_contains: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Filtros case-insensitive:
            - category: igualdade exata
            - name_contains: substring do nome
        Ordenado por createdAt
        """

    @abstractmethod
    def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def get_by_store_id(self, store_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def update(self, store_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Retorna o item atualizado ou None se não existir"""

    @abstractmethod
    def delete(self, store_id: str) -> bool:
        """Retorna False se o item não existir"""

    def count(self) -> int:
        return len(self.find())

    def count_by_category(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for item in self.find():
            counts[item["category"]] = counts.get(item["category"], 0) + 1
        return counts
