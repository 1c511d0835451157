#!/usr/bin/env python3
"""
Create the posts table in DynamoDB Local (or any endpoint DDB_ENDPOINT_URL points at).

Usage:
    DDB_ENDPOINT_URL=http://localhost:8000 python backend/scripts/create_local_table.py [--table BlogPosts]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

# Allow running straight from a checkout.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from blog_api.observability.logging import configure_logging, get_logger
from blog_api.settings import get_settings

log = get_logger("create_local_table")


def create_posts_table(client, table_name: str) -> bool:
    """Create `table_name` keyed by string `id`. Returns False if it already exists."""
    try:
        client.create_table(
            TableName=table_name,
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        if (e.response.get("Error") or {}).get("Code") == "ResourceInUseException":
            return False
        raise
    client.get_waiter("table_exists").wait(TableName=table_name)
    return True


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create the posts table for local development")
    parser.add_argument("--table", default=settings.ddb_table_name or "BlogPosts")
    parser.add_argument("--endpoint-url", default=settings.ddb_endpoint_url or "http://localhost:8000")
    args = parser.parse_args()

    configure_logging(level=settings.log_level)
    client = boto3.client("dynamodb", region_name=settings.aws_region, endpoint_url=args.endpoint_url)

    created = create_posts_table(client, args.table)
    log.info("table_ready", table=args.table, endpoint_url=args.endpoint_url, created=created)


if __name__ == "__main__":
    main()
