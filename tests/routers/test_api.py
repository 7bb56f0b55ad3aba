"""HTTP 接口测试"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from catalog_engine.core.config import Settings
from catalog_engine.core.errors import KeyGenerationError
from catalog_engine.main import create_app
from catalog_engine.services.keygen import KeyGenerator


def _settings(**overrides) -> Settings:
    values = {"STORAGE_BACKEND": "memory", "LOG_FILE": "", "KEYGEN_URL": ""}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client():
    with TestClient(create_app(_settings())) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(client, item):
    response = client.post("/api/v1/items/batch", json=[item.model_dump(mode="json")])
    assert response.status_code == 200
    return client


def _page(client, keys, changed=None, currency="USD", item_id="item-1", headers=None):
    return client.post(
        "/api/v1/items/page",
        json={
            "item_id": item_id,
            "attr": {"keys": keys, "changed_key_index": changed},
            "currency": currency,
        },
        headers=headers,
    )


class TestRouters:
    """测试路由注册"""

    def test_prefixes(self):
        from catalog_engine.routers import audit, items, store

        assert store.router.prefix == "/api/v1/store"
        assert items.router.prefix == "/api/v1/items"
        assert audit.router.prefix == "/api/v1/audit"


class TestHealth:
    def test_health(self, seeded_client):
        body = seeded_client.get("/health").json()
        assert body["status"] == "ok"
        assert body["storage"] == "memory"
        assert body["items"] == 1


class TestStoreApi:
    """测试店铺信息接口"""

    def test_uninitialized(self, client):
        response = client.get("/api/v1/store")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "store_not_found"

    def test_update(self, client):
        response = client.put("/api/v1/store", json={"id": "s1", "name": "旗舰店"})
        assert response.status_code == 200
        assert response.json()["previous"] == {"tag": "none"}
        assert response.json()["current"]["name"] == "旗舰店"

        response = client.put("/api/v1/store", json={"id": "s1", "name": "新店名"})
        assert response.json()["previous"]["name"] == "旗舰店"
        assert client.get("/api/v1/store").json()["name"] == "新店名"

    def test_init_from_settings(self):
        app = create_app(_settings(STORE_ID="s9", STORE_NAME="启动店"))
        with TestClient(app) as test_client:
            assert test_client.get("/api/v1/store").json() == {"tag": "v1", "id": "s9", "name": "启动店"}

    def test_oversized_record(self):
        app = create_app(_settings(RECORD_MAX_BYTES=16))
        with TestClient(app) as test_client:
            response = test_client.put("/api/v1/store", json={"id": "s1", "name": "旗舰店"})
            assert response.status_code == 500
            assert response.json()["error"]["data"] == {"type": "RecordEncodeError"}


class TestItemsApi:
    """测试商品接口"""

    def test_first_load(self, seeded_client):
        response = _page(seeded_client, [0, 0, None, None])
        assert response.status_code == 200
        body = response.json()
        assert body["static_data"]["item_name"] == "纯棉T恤"
        assert body["price"] == 10
        assert body["fallback_attr"] is None
        assert body["attr_status"][0] == [{"is_in_stock": True}, {"is_in_stock": False}]

    def test_fallback(self, seeded_client):
        body = _page(seeded_client, [0, 1, None, None], changed=1).json()
        assert body["static_data"] is None
        assert body["fallback_attr"] == [1, 1, None, None]
        assert body["stock"] == 3

    def test_item_not_found(self, seeded_client):
        response = _page(seeded_client, [0, 0, None, None], item_id="missing")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ItemNotFound"
        assert "missing" in response.json()["error"]["message"]

    def test_no_available_attr(self, seeded_client):
        response = _page(seeded_client, [0, 1, None, None])
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "NoAvailableAttr"

    def test_invalid_request(self, seeded_client):
        response = _page(seeded_client, [0, 0, None, None], changed=4)
        assert response.status_code == 422

    def test_core(self, seeded_client):
        response = seeded_client.post(
            "/api/v1/items/core",
            json={"item_id": "item-1", "keys": [0, 0, None, None], "currency": "EUR"},
        )
        assert response.status_code == 200
        assert response.json()["price"] == 9.5
        assert response.json()["image"]["caption"] == "正面"

    def test_batch_reinsert(self, seeded_client, make_item):
        response = seeded_client.post(
            "/api/v1/items/batch",
            json=[
                make_item("item-1", name="新款").model_dump(mode="json"),
                make_item("item-2").model_dump(mode="json"),
            ],
        )
        assert response.status_code == 200
        [previous] = response.json()
        assert previous["id"] == "item-1"

        body = _page(seeded_client, [0, 0, None, None]).json()
        assert body["static_data"]["item_name"] == "新款"

    def test_batch_keygen_unavailable(self, client, item):
        keygen = MagicMock(spec=KeyGenerator)
        keygen.create_four = AsyncMock(side_effect=KeyGenerationError("键服务不可用"))
        client.app.state.container.keygen = keygen

        response = client.post("/api/v1/items/batch", json=[item.model_dump(mode="json")])
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "service_unavailable"
        assert client.get("/health").json()["items"] == 0


class TestAuditApi:
    """测试审计日志接口"""

    def test_page_queries_are_audited(self, seeded_client):
        _page(seeded_client, [0, 0, None, None], headers={"X-Caller-Id": "web"})
        _page(seeded_client, [0, 0, None, None], item_id="missing")

        entries = seeded_client.get("/api/v1/audit", params={"limit": 10}).json()
        assert [e["message"] for e in entries] == ["get_item_page_data: Ok", "get_item_page_data: Err"]
        assert entries[0]["caller"] == "web"
        assert entries[1]["level"] == "Error"
        assert entries[1]["context"].startswith("code: ItemNotFound")

    def test_limit_validation(self, client):
        assert client.get("/api/v1/audit", params={"limit": 0}).status_code == 422
