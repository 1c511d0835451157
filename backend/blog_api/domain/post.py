from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Post:
    id: str
    title: str
    content: str

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Post":
        # The table only enforces `id`; tolerate items written by other tools.
        return cls(
            id=str(item.get("id") or ""),
            title=str(item.get("title") or ""),
            content=str(item.get("content") or ""),
        )

    def to_item(self) -> dict[str, Any]:
        return asdict(self)
