from __future__ import annotations

from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from ..services.post_service import PostService
from .types import PostType


def _post_service(info: Info) -> PostService:
    return info.context["post_service"]


# boto3 calls block; run them off the event loop.


async def get_all_posts(info: Info) -> list[PostType]:
    posts = await run_in_threadpool(_post_service(info).list_all)
    return [PostType.from_domain(p) for p in posts]


async def create_post(info: Info, title: str, content: str) -> PostType:
    post = await run_in_threadpool(_post_service(info).create, title, content)
    return PostType.from_domain(post)


async def update_post(info: Info, id: str, title: str, content: str) -> PostType:
    post = await run_in_threadpool(_post_service(info).update, id, title, content)
    return PostType.from_domain(post)


async def delete_post(info: Info, id: str) -> str:
    return await run_in_threadpool(_post_service(info).delete, id)
