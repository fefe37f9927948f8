"""
Store de produtos sobre DynamoDB

Convenções
    - Nome da Partition Key: 'pk' (sempre 'PRODUCT')
    - Nome da Sort Key: 'sk' (formato: 'PRODUCT#<_id>')
    - Itens armazenam os dados do produto nos atributos de nível superior (id, _id, name, description, price, category, inStock, createdAt)
    - price é gravado como Decimal (exigência do boto3) e convertido de volta na leitura
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from infra.store import ProductStore, StoreError, new_store_id

log = logging.getLogger(__name__)

PARTITION = "PRODUCT"
_KEY_ATTRS = ("pk", "sk")


def _sk(store_id: str) -> str:
    return f"{PARTITION}#{store_id}"


def _error_code(exc: ClientError) -> Optional[str]:
    return exc.response.get("Error", {}).get("Code")


def _to_db(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def _from_db(item: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: v for k, v in item.items() if k not in _KEY_ATTRS}
    for k, v in out.items():
        if isinstance(v, Decimal):
            out[k] = int(v) if v == v.to_integral_value() else float(v)
    return out


class DynamoProductStore(ProductStore):

    def __init__(self, dynamo_resource, table_name: str):
        self.table_name = table_name
        self._table = dynamo_resource.Table(table_name)
        self._resource = dynamo_resource

    def ensure_table(self) -> None:
        """
        Cria a tabela se ela ainda não existir (útil em localstack)
        Dá raise StoreError se o DynamoDB estiver inacessível
        """
        try:
            self._table.load()
            return
        except ClientError as e:
            if _error_code(e) != "ResourceNotFoundException":
                log.exception("DynamoDB describe_table failed")
                raise StoreError(str(e)) from e
        except BotoCoreError as e:
            log.exception("DynamoDB unreachable")
            raise StoreError(str(e)) from e

        log.info("Criando tabela DynamoDB %s", self.table_name)
        try:
            table = self._resource.create_table(
                TableName=self.table_name,
                KeySchema=[
                    {"AttributeName": "pk", "KeyType": "HASH"},
                    {"AttributeName": "sk", "KeyType": "RANGE"},
                ],
                AttributeDefinitions=[
                    {"AttributeName": "pk", "AttributeType": "S"},
                    {"AttributeName": "sk", "AttributeType": "S"},
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            table.wait_until_exists()
        except (ClientError, BotoCoreError) as e:
            log.exception("DynamoDB create_table failed")
            raise StoreError(str(e)) from e
        self._table = table

    def _query_all(self, **kwargs) -> List[Dict[str, Any]]:
        """Query na partição inteira, seguindo LastEvaluatedKey"""
        items: List[Dict[str, Any]] = []
        kwargs["KeyConditionExpression"] = Key("pk").eq(PARTITION)
        try:
            while True:
                resp = self._table.query(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            log.exception("DynamoDB query failed")
            raise StoreError(str(e)) from e
        return [_from_db(it) for it in items]

    def create(self, item: Dict[str, Any]) -> Dict[str, Any]:
        store_id = new_store_id()
        db_item = {k: _to_db(v) for k, v in item.items()}
        db_item.update({"pk": PARTITION, "sk": _sk(store_id), "_id": store_id})
        log.debug("Creating product item: id=%s _id=%s", item.get("id"), store_id)
        try:
            self._table.put_item(Item=db_item)
        except (ClientError, BotoCoreError) as e:
            log.exception("DynamoDB put_item failed")
            raise StoreError(str(e)) from e
        return _from_db(db_item)

    def find(self, category: Optional[str] = None, name_contains: Optional[str] = None) -> List[Dict[str, Any]]:
        items = self._query_all()
        # DynamoDB não compara ignorando caixa; filtra-se localmente
        if category is not None:
            items = [it for it in items if it.get("category", "").lower() == category.lower()]
        if name_contains is not None:
            items = [it for it in items if name_contains.lower() in it.get("name", "").lower()]
        return sorted(items, key=lambda it: it.get("createdAt") or "")

    def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        items = self._query_all(FilterExpression=Attr("id").eq(product_id))
        return items[0] if items else None

    def get_by_store_id(self, store_id: str) -> Optional[Dict[str, Any]]:
        try:
            resp = self._table.get_item(Key={"pk": PARTITION, "sk": _sk(store_id)})
        except (ClientError, BotoCoreError) as e:
            log.exception("DynamoDB get_item failed")
            raise StoreError(str(e)) from e
        item = resp.get("Item")
        return _from_db(item) if item else None

    def update(self, store_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update condicional: só se concretiza se o item existir
        Retorna None quando a condição falha
        """
        if not updates:
            return self.get_by_store_id(store_id)

        # Construir expressão de update
        expr_parts = []
        expr_attr_vals = {}
        expr_attr_names = {}
        for i, (k, v) in enumerate(updates.items()):
            placeholder = f":v{i}"
            name_placeholder = f"#n{i}"
            expr_parts.append(f"{name_placeholder} = {placeholder}")
            expr_attr_names[name_placeholder] = k
            expr_attr_vals[placeholder] = _to_db(v)

        try:
            resp = self._table.update_item(
                Key={"pk": PARTITION, "sk": _sk(store_id)},
                UpdateExpression="SET " + ", ".join(expr_parts),
                ConditionExpression="attribute_exists(pk) AND attribute_exists(sk)",
                ExpressionAttributeValues=expr_attr_vals,
                ExpressionAttributeNames=expr_attr_names,
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            code = _error_code(e)
            if code == "ConditionalCheckFailedException":
                return None
            log.exception("DynamoDB update_item failed: %s", code)
            raise StoreError(str(e)) from e
        except BotoCoreError as e:
            log.exception("DynamoDB update_item failed")
            raise StoreError(str(e)) from e

        return _from_db(resp.get("Attributes", {}))

    def delete(self, store_id: str) -> bool:
        try:
            self._table.delete_item(
                Key={"pk": PARTITION, "sk": _sk(store_id)},
                ConditionExpression="attribute_exists(pk) AND attribute_exists(sk)",
            )
        except ClientError as e:
            code = _error_code(e)
            if code == "ConditionalCheckFailedException":
                return False
            log.exception("DynamoDB delete_item failed: %s", code)
            raise StoreError(str(e)) from e
        except BotoCoreError as e:
            log.exception("DynamoDB delete_item failed")
            raise StoreError(str(e)) from e
        return True

    def count(self) -> int:
        try:
            total = 0
            kwargs = {"KeyConditionExpression": Key("pk").eq(PARTITION), "Select": "COUNT"}
            while True:
                resp = self._table.query(**kwargs)
                total += resp.get("Count", 0)
                if not resp.get("LastEvaluatedKey"):
                    return total
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except (ClientError, BotoCoreError) as e:
            log.exception("DynamoDB query(COUNT) failed")
            raise StoreError(str(e)) from e
