from __future__ import annotations

import uuid
from typing import Any, Protocol

from ..domain.post import Post
from ..observability.logging import get_logger

log = get_logger("post_service")


class PostStore(Protocol):
    table_name: str

    def scan_all(self) -> list[dict[str, Any]]: ...

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]: ...

    def update_item(
        self,
        *,
        key: dict[str, Any],
        update_expression: str,
        expression_attribute_names: dict[str, str] | None,
        expression_attribute_values: dict[str, Any],
        return_values: str = "ALL_NEW",
    ) -> dict[str, Any] | None: ...

    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...


def new_post_id() -> str:
    return str(uuid.uuid4())


def post_key(post_id: str) -> dict[str, str]:
    return {"id": str(post_id)}


class PostService:
    """
    CRUD over the posts table. Every method makes exactly one store call and
    lets storage errors propagate to the caller.
    """

    def __init__(self, store: PostStore):
        self._store = store

    def list_all(self) -> list[Post]:
        # Order is whatever the scan returns.
        posts = [Post.from_item(it) for it in self._store.scan_all()]
        log.info("posts_listed", count=len(posts))
        return posts

    def create(self, title: str, content: str) -> Post:
        post = Post(id=new_post_id(), title=title, content=content)
        self._store.put_item(item=post.to_item())
        log.info("post_created", post_id=post.id)
        return post

    def update(self, id: str, title: str, content: str) -> Post:
        """
        Overwrite title/content under `id`.

        Updating an id that does not exist creates it (upsert); this is not
        reported as an error. The returned post is built from the inputs, not
        re-read from the store.
        """
        self._store.update_item(
            key=post_key(id),
            update_expression="SET #title = :title, #content = :content",
            expression_attribute_names={"#title": "title", "#content": "content"},
            expression_attribute_values={":title": title, ":content": content},
        )
        log.info("post_updated", post_id=id)
        return Post(id=id, title=title, content=content)

    def delete(self, id: str) -> str:
        # Deleting a missing id is a no-op at the store, so this is idempotent.
        self._store.delete_item(key=post_key(id))
        log.info("post_deleted", post_id=id)
        return id
