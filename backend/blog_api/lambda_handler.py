"""AWS Lambda entry point.

API Gateway events are translated to ASGI by Mangum. Building the FastAPI app
(schema, routers, boto3 resource) is the expensive part of a cold start, so
each `LambdaEntryPoint` builds it on first use and reuses it for every later
invocation in the same execution context.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

from mangum import Mangum

from .observability.logging import get_logger
from .settings import get_settings

AdapterFactory = Callable[[], Callable[[dict[str, Any], Any], dict[str, Any]]]


def build_adapter() -> Mangum:
    from .main import create_app

    settings = get_settings()
    return Mangum(
        create_app(),
        lifespan="off",
        api_gateway_base_path=settings.api_gateway_base_path,
    )


class LambdaEntryPoint:
    """Lazily-initialised handle around the HTTP adapter.

    cold: no adapter yet; the first call builds one under the lock.
    warm: the cached adapter serves every call.
    """

    def __init__(self, adapter_factory: AdapterFactory = build_adapter):
        self._adapter_factory = adapter_factory
        self._adapter: Callable[[dict[str, Any], Any], dict[str, Any]] | None = None
        self._lock = threading.Lock()

    @property
    def is_warm(self) -> bool:
        return self._adapter is not None

    def adapter(self) -> Callable[[dict[str, Any], Any], dict[str, Any]]:
        adapter = self._adapter
        if adapter is not None:
            return adapter

        with self._lock:
            if self._adapter is None:
                start = time.perf_counter()
                self._adapter = self._adapter_factory()
                get_logger("lambda").info(
                    "lambda_cold_start",
                    init_ms=round((time.perf_counter() - start) * 1000.0, 2),
                )
            return self._adapter

    def __call__(self, event: dict[str, Any], context: Any) -> dict[str, Any]:
        return self.adapter()(event, context)


handler = LambdaEntryPoint()
