"""Shared DynamoDB utilities.

This package centralizes:
- boto3 resource configuration (region, optional local endpoint)
- botocore -> typed error mapping for every store call
- the table wrapper used by the post service

"""

from __future__ import annotations

from .errors import (
    DdbConflict,
    DdbError,
    DdbInternal,
    DdbThrottled,
    DdbUnavailable,
    DdbValidation,
)
from .table import DynamoTable, get_posts_table

__all__ = [
    "DdbConflict",
    "DdbError",
    "DdbInternal",
    "DdbThrottled",
    "DdbUnavailable",
    "DdbValidation",
    "DynamoTable",
    "get_posts_table",
]
