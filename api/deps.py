from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader, APIKeyQuery

from infra.store import ProductStore
from services.catalog import ProductCatalog
from services.errors import ValidationError

API_KEY_NAME = "x-api-key"

# Settings
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    api_key: str = Field("12345", validation_alias="API_KEY")
    store_backend: str = Field("memory", validation_alias="STORE_BACKEND")
    aws_endpoint_url: Optional[str] = Field(None, validation_alias="AWS_ENDPOINT_URL")
    aws_region: str = Field("us-east-1", validation_alias="AWS_REGION")
    dynamo_table: str = Field("products", validation_alias="DYNAMO_TABLE")
    seed_sample_products: bool = Field(False, validation_alias="SEED_SAMPLE_PRODUCTS")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3000, validation_alias="PORT")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

_settings: Settings | None = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

# Store factory
def build_store(settings: Settings) -> ProductStore:
    """
    Constrói o store escolhido em STORE_BACKEND
    Import lazy para que boto3 só seja carregado quando o backend for dynamo
    """
    if settings.store_backend == "dynamo":
        from infra.aws_client import dynamo_resource
        from infra.dynamo import DynamoProductStore

        resource = dynamo_resource(settings.aws_endpoint_url, settings.aws_region)
        store = DynamoProductStore(resource, settings.dynamo_table)
        store.ensure_table()
        return store

    if settings.store_backend == "memory":
        from infra.memory import InMemoryProductStore
        return InMemoryProductStore()

    raise ValueError(f"STORE_BACKEND desconhecido: {settings.store_backend!r}")

def get_store(request: Request) -> ProductStore:
    return request.app.state.store

def get_catalog(store: ProductStore = Depends(get_store)) -> ProductCatalog:
    return ProductCatalog(store)

# API key gate: header x-api-key, ou query ?x-api-key= por conveniência
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)
api_key_query = APIKeyQuery(name=API_KEY_NAME, auto_error=False)

def require_api_key(
        request: Request,
        header_key: Optional[str] = Security(api_key_header),
        query_key: Optional[str] = Security(api_key_query),
) -> str:
    """
    Raises ValidationError (400) se a chave estiver ausente ou incorreta
    """
    expected = request.app.state.settings.api_key
    api_key = header_key or query_key
    if not api_key or api_key != expected:
        raise ValidationError("Invalid or missing API key")
    return api_key
