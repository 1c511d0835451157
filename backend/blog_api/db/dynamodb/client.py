from __future__ import annotations

from functools import lru_cache

import boto3
from botocore.config import Config

from ...settings import get_settings


@lru_cache(maxsize=1)
def botocore_config() -> Config:
    # botocore's standard retry mode is the only retry layer; the app makes a
    # single call per operation.
    return Config(
        retries={"max_attempts": 3, "mode": "standard"},
        connect_timeout=2,
        read_timeout=10,
    )


@lru_cache(maxsize=1)
def dynamodb_resource():
    settings = get_settings()
    return boto3.resource(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.ddb_endpoint_url or None,
        config=botocore_config(),
    )


def table_resource(table_name: str):
    return dynamodb_resource().Table(table_name)
