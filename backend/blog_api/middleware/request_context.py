from __future__ import annotations

import uuid
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..observability.context import aws_request_id_var, request_id_var


def _api_gateway_request_id(scope: dict[str, Any]) -> str | None:
    # Mangum exposes the raw API Gateway event as scope["aws.event"].
    event = scope.get("aws.event") or {}
    rid = (event.get("requestContext") or {}).get("requestId")
    return str(rid) if rid else None


def _lambda_request_id(scope: dict[str, Any]) -> str | None:
    context = scope.get("aws.context")
    if context is None:
        return None
    if isinstance(context, dict):
        rid = context.get("aws_request_id")
    else:
        rid = getattr(context, "aws_request_id", None)
    return str(rid) if rid else None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Resolves the request id as: inbound X-Request-Id, else the API Gateway
    requestContext.requestId, else a fresh UUIDv4. The id is stored on
    request.state, published to logging, and echoed in X-Request-Id.

    Under Lambda the invocation's aws_request_id is published to logging too.
    """

    header_name = "X-Request-Id"

    async def dispatch(self, request: Request, call_next):
        inbound = (request.headers.get("x-request-id") or "").strip()
        request_id = inbound or _api_gateway_request_id(request.scope) or str(uuid.uuid4())
        aws_request_id = _lambda_request_id(request.scope)

        request.state.request_id = request_id
        rid_token = request_id_var.set(request_id)
        aws_token = aws_request_id_var.set(aws_request_id)
        try:
            response = await call_next(request)
        finally:
            aws_request_id_var.reset(aws_token)
            request_id_var.reset(rid_token)
        response.headers[self.header_name] = request_id
        return response
