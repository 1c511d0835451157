from __future__ import annotations

from typing import Any

from fastapi import Depends
from strawberry.fastapi import GraphQLRouter

from ..db.dynamodb.table import get_posts_table
from ..graphql_schema import build_schema
from ..services.post_service import PostService
from ..settings import Settings


def get_post_service() -> PostService:
    return PostService(get_posts_table())


async def get_context(post_service: PostService = Depends(get_post_service)) -> dict[str, Any]:
    return {"post_service": post_service}


def build_graphql_router(settings: Settings) -> GraphQLRouter:
    return GraphQLRouter(
        build_schema(mask_errors=settings.is_production),
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphql_ide else None,
        allow_queries_via_get=settings.graphql_ide,
    )
