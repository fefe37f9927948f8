import pytest
from fastapi.testclient import TestClient

from api.deps import Settings
from api.main import create_app
from infra.memory import InMemoryProductStore

API_KEY = "test-key"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    # nada de .env ou variáveis do ambiente vazando para os testes
    for name in ("API_KEY", "STORE_BACKEND", "SEED_SAMPLE_PRODUCTS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def auth() -> dict:
    return {"x-api-key": API_KEY}


@pytest.fixture
def app_factory():
    def build(store, **overrides):
        options = {"seed_sample_products": False, **overrides}
        settings = Settings(_env_file=None, api_key=API_KEY, store_backend="memory", **options)
        return create_app(settings, store=store)
    return build


@pytest.fixture
def store() -> InMemoryProductStore:
    return InMemoryProductStore()


@pytest.fixture
def client(app_factory, store, auth):
    with TestClient(app_factory(store), headers=auth) as c:
        yield c


@pytest.fixture
def anon_client(app_factory, store):
    with TestClient(app_factory(store)) as c:
        yield c


@pytest.fixture
def seeded_client(app_factory, auth):
    app = app_factory(InMemoryProductStore(), seed_sample_products=True)
    with TestClient(app, headers=auth) as c:
        yield c


@pytest.fixture
def laptop() -> dict:
    return {
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "Electronics",
        "inStock": True,
    }
