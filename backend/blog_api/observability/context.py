from __future__ import annotations

from contextvars import ContextVar
from typing import Any

# Per-request identifiers. request_id is what clients see in X-Request-Id;
# aws_request_id is the Lambda invocation id (absent under uvicorn).
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
aws_request_id_var: ContextVar[str | None] = ContextVar("aws_request_id", default=None)


def get_request_id() -> str | None:
    return request_id_var.get()


def get_aws_request_id() -> str | None:
    return aws_request_id_var.get()


def invocation_ids() -> dict[str, Any]:
    out: dict[str, Any] = {}
    rid = request_id_var.get()
    if rid:
        out["request_id"] = rid
    aws_rid = aws_request_id_var.get()
    if aws_rid:
        out["aws_request_id"] = aws_rid
    return out
