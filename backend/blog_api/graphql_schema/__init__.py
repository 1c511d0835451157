from __future__ import annotations

from .schema import BlogSchema, build_schema

__all__ = ["BlogSchema", "build_schema"]
