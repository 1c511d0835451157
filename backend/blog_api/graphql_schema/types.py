from __future__ import annotations

import strawberry

from ..domain.post import Post


@strawberry.type(name="Post")
class PostType:
    id: strawberry.ID
    title: str
    content: str

    @classmethod
    def from_domain(cls, post: Post) -> "PostType":
        return cls(id=strawberry.ID(post.id), title=post.title, content=post.content)
