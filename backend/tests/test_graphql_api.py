from __future__ import annotations

from typing import Any

from botocore.exceptions import EndpointConnectionError
from fastapi.testclient import TestClient

GET_ALL = "query { getAllPosts { id title content } }"
CREATE = """
mutation Create($title: String!, $content: String!) {
  createPost(title: $title, content: $content) { id title content }
}
"""
UPDATE = """
mutation Update($id: String!, $title: String!, $content: String!) {
  updatePost(id: $id, title: $title, content: $content) { id title content }
}
"""
DELETE = "mutation Delete($id: String!) { deletePost(id: $id) }"


def _gql(client: TestClient, query: str, variables: dict[str, Any] | None = None):
    r = client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert r.status_code == 200
    return r.json()


def test_get_all_posts_empty(client):
    body = _gql(client, GET_ALL)
    assert body["data"] == {"getAllPosts": []}
    assert "errors" not in body or not body["errors"]


def test_create_then_get_all(client):
    created = _gql(client, CREATE, {"title": "Hello", "content": "World"})["data"]["createPost"]
    assert created["id"]
    assert created["title"] == "Hello"
    assert created["content"] == "World"

    posts = _gql(client, GET_ALL)["data"]["getAllPosts"]
    assert posts == [created]


def test_update_post_roundtrip(client, fake_table):
    post_id = _gql(client, CREATE, {"title": "A", "content": "B"})["data"]["createPost"]["id"]

    updated = _gql(client, UPDATE, {"id": post_id, "title": "A2", "content": "B2"})["data"]["updatePost"]
    assert updated == {"id": post_id, "title": "A2", "content": "B2"}

    posts = _gql(client, GET_ALL)["data"]["getAllPosts"]
    assert [p for p in posts if p["id"] == post_id] == [updated]


def test_update_unknown_post_creates_it(client, fake_table):
    updated = _gql(client, UPDATE, {"id": "ghost", "title": "T", "content": "C"})["data"]["updatePost"]
    assert updated == {"id": "ghost", "title": "T", "content": "C"}
    assert fake_table.items["ghost"]["title"] == "T"


def test_delete_post_twice_returns_id(client):
    post_id = _gql(client, CREATE, {"title": "A", "content": "B"})["data"]["createPost"]["id"]

    assert _gql(client, DELETE, {"id": post_id})["data"] == {"deletePost": post_id}
    assert _gql(client, DELETE, {"id": post_id})["data"] == {"deletePost": post_id}
    assert _gql(client, GET_ALL)["data"]["getAllPosts"] == []


def test_missing_argument_is_rejected_before_service(client, fake_table):
    body = _gql(client, 'mutation { createPost(title: "only title") { id } }')

    assert body.get("data") is None
    assert body["errors"]
    assert "content" in body["errors"][0]["message"]
    assert fake_table.calls == []


def test_wrong_argument_type_is_rejected(client, fake_table):
    body = _gql(client, "mutation { deletePost(id: 42) }")

    assert body["errors"]
    assert fake_table.calls == []


def test_store_failure_is_reported_in_errors(client, fake_table):
    fake_table.failures["scan"] = EndpointConnectionError(endpoint_url="http://localhost:8000")

    body = _gql(client, GET_ALL)
    assert body["data"] is None
    assert body["errors"][0]["message"] == "DynamoDB is unreachable"
    assert body["errors"][0]["path"] == ["getAllPosts"]


def test_store_failure_is_masked_in_production(monkeypatch, post_service, fake_table):
    from blog_api.main import create_app
    from blog_api.routers.graphql_api import get_post_service

    monkeypatch.setenv("APP_ENV", "production")
    app = create_app()
    app.dependency_overrides[get_post_service] = lambda: post_service
    client = TestClient(app)

    fake_table.failures["put_item"] = EndpointConnectionError(endpoint_url="https://dynamodb")
    body = _gql(client, CREATE, {"title": "A", "content": "B"})

    assert body["errors"][0]["message"] == "Unexpected error."
    # Validation messages stay readable.
    body = _gql(client, 'mutation { createPost(title: "x") { id } }')
    assert "content" in body["errors"][0]["message"]


def test_schema_matches_query_surface():
    from blog_api.graphql_schema import build_schema

    sdl = str(build_schema())
    assert "getAllPosts: [Post!]!" in sdl
    assert "createPost(title: String!, content: String!): Post!" in sdl
    assert "updatePost(id: String!, title: String!, content: String!): Post!" in sdl
    assert "deletePost(id: String!): String!" in sdl
    assert "id: ID!" in sdl
