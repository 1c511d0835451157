from __future__ import annotations

from typing import Any

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors

from ..observability.logging import get_logger
from . import resolvers
from .types import PostType

log = get_logger("graphql")


@strawberry.type
class Query:
    get_all_posts: list[PostType] = strawberry.field(resolver=resolvers.get_all_posts)


@strawberry.type
class Mutation:
    create_post: PostType = strawberry.mutation(resolver=resolvers.create_post)
    update_post: PostType = strawberry.mutation(resolver=resolvers.update_post)
    delete_post: str = strawberry.mutation(resolver=resolvers.delete_post)


def _is_resolver_failure(error: GraphQLError) -> bool:
    # Parse/validation errors carry no original_error and are safe to show.
    original = getattr(error, "original_error", None)
    return original is not None and not isinstance(original, GraphQLError)


class BlogSchema(strawberry.Schema):
    def process_errors(self, errors: list[GraphQLError], execution_context: Any = None) -> None:
        for error in errors:
            original = getattr(error, "original_error", None)
            fields: dict[str, Any] = {
                "message": error.message,
                "path": list(error.path) if error.path else None,
                "error_type": type(original).__name__ if original is not None else "GraphQLError",
            }
            operation = getattr(original, "operation", None)
            if operation:
                fields["ddb_operation"] = operation
            if _is_resolver_failure(error):
                log.error("graphql_error", exc_info=original, **fields)
            else:
                log.info("graphql_rejected", **fields)


def build_schema(*, mask_errors: bool = False) -> BlogSchema:
    """
    Build the posts schema. With `mask_errors`, exceptions raised inside
    resolvers are reported as a generic message (they are still logged).
    """
    extensions: list[Any] = []
    if mask_errors:
        extensions.append(MaskErrors(should_mask_error=_is_resolver_failure))
    return BlogSchema(query=Query, mutation=Mutation, extensions=extensions)
