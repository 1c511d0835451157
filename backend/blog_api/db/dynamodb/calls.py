from __future__ import annotations

from typing import Any, Callable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError, ParamValidationError

from .errors import (
    DdbConflict,
    DdbError,
    DdbInternal,
    DdbThrottled,
    DdbUnavailable,
    DdbValidation,
)

T = TypeVar("T")


_THROTTLE_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "InternalServerError",
    "ServiceUnavailable",
}

_UNAVAILABLE_CODES = {
    "AccessDeniedException",
    "UnrecognizedClientException",
    "ResourceNotFoundException",
}


def _aws_request_id_from_client_error(e: ClientError) -> str | None:
    return ((e.response or {}).get("ResponseMetadata") or {}).get("RequestId")


def _err_code_from_client_error(e: ClientError) -> str | None:
    return ((e.response or {}).get("Error") or {}).get("Code")


def map_botocore_error(
    *,
    operation: str,
    table_name: str | None,
    key: dict[str, Any] | None,
    exc: Exception,
) -> DdbError:
    if isinstance(exc, DdbError):
        return exc

    common: dict[str, Any] = {
        "operation": operation,
        "table_name": table_name,
        "key": key,
        "cause": exc,
    }

    if isinstance(exc, ClientError):
        code = _err_code_from_client_error(exc) or ""
        common["aws_request_id"] = _aws_request_id_from_client_error(exc)

        if code == "ConditionalCheckFailedException":
            return DdbConflict(message="DynamoDB conditional check failed", **common)

        if code == "ValidationException":
            return DdbValidation(message="DynamoDB request validation failed", **common)

        if code == "ResourceNotFoundException":
            return DdbUnavailable(message=f"DynamoDB table not found: {table_name}", **common)

        if code in _UNAVAILABLE_CODES:
            return DdbUnavailable(message="DynamoDB access denied", **common)

        if code in _THROTTLE_CODES:
            return DdbThrottled(
                message="DynamoDB request throttled or unavailable",
                retryable=True,
                **common,
            )

        return DdbInternal(message=f"DynamoDB request failed ({code or 'ClientError'})", **common)

    if isinstance(exc, ParamValidationError):
        # Raised client-side before any request is sent.
        return DdbValidation(message="DynamoDB request validation failed", **common)

    if isinstance(exc, BotoCoreError):
        # Connection refused, DNS failure, timeouts, missing credentials...
        return DdbUnavailable(message="DynamoDB is unreachable", retryable=True, **common)

    return DdbInternal(message="Unexpected DynamoDB error", **common)


def ddb_call(
    operation: str,
    fn: Callable[[], T],
    *,
    table_name: str | None = None,
    key: dict[str, Any] | None = None,
) -> T:
    """Run one store call, translating botocore failures into `DdbError`s."""
    try:
        return fn()
    except DdbError:
        raise
    except Exception as e:  # noqa: BLE001
        raise map_botocore_error(
            operation=operation,
            table_name=table_name,
            key=key,
            exc=e,
        ) from e
