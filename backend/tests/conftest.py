from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure `backend/` is on sys.path so `import blog_api.*` works in tests.
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

_ENV_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "CORS_ORIGINS",
    "DDB_TABLE_NAME",
    "DDB_ENDPOINT_URL",
    "GRAPHQL_PATH",
    "GRAPHQL_IDE_ENABLED",
    "API_GATEWAY_BASE_PATH",
)


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table resource keyed by `id`."""

    def __init__(self, items: list[dict[str, Any]] | None = None):
        self.items: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.last_evaluated_key: dict[str, Any] | None = None
        for it in items or []:
            self.items[it["id"]] = dict(it)

    def _maybe_fail(self, op: str) -> None:
        self.calls.append(op)
        exc = self.failures.get(op)
        if exc is not None:
            raise exc

    def scan(self, **kwargs):
        self._maybe_fail("scan")
        resp: dict[str, Any] = {"Items": [dict(v) for v in self.items.values()]}
        if self.last_evaluated_key:
            resp["LastEvaluatedKey"] = self.last_evaluated_key
        return resp

    def put_item(self, *, Item):
        self._maybe_fail("put_item")
        self.items[Item["id"]] = dict(Item)
        return {}

    def update_item(
        self,
        *,
        Key,
        UpdateExpression,
        ExpressionAttributeValues,
        ReturnValues="NONE",
        ExpressionAttributeNames=None,
    ):
        self._maybe_fail("update_item")
        names = ExpressionAttributeNames or {}
        assert UpdateExpression.upper().startswith("SET ")
        item = self.items.setdefault(Key["id"], dict(Key))
        for clause in UpdateExpression[4:].split(","):
            lhs, rhs = [p.strip() for p in clause.split("=")]
            item[names.get(lhs, lhs)] = ExpressionAttributeValues[rhs]
        return {"Attributes": dict(item)} if ReturnValues == "ALL_NEW" else {}

    def delete_item(self, *, Key):
        self._maybe_fail("delete_item")
        self.items.pop(Key["id"], None)
        return {}


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    from blog_api.db.dynamodb.client import dynamodb_resource
    from blog_api.settings import get_settings

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    dynamodb_resource.cache_clear()
    yield
    get_settings.cache_clear()
    dynamodb_resource.cache_clear()


@pytest.fixture
def fake_table() -> FakeTable:
    return FakeTable()


@pytest.fixture
def posts_table(monkeypatch, fake_table):
    from blog_api.db.dynamodb import table as table_mod

    monkeypatch.setattr(table_mod, "table_resource", lambda name: fake_table)
    return table_mod.DynamoTable(table_name="BlogPosts")


@pytest.fixture
def post_service(posts_table):
    from blog_api.services.post_service import PostService

    return PostService(posts_table)


@pytest.fixture
def app(post_service):
    from blog_api.main import create_app
    from blog_api.routers.graphql_api import get_post_service

    application = create_app()
    application.dependency_overrides[get_post_service] = lambda: post_service
    return application


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)
