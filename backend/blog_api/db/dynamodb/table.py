from __future__ import annotations

from typing import Any

from ...observability.logging import get_logger
from .calls import ddb_call
from .client import table_resource
from .errors import DdbInternal

log = get_logger("ddb")


class DynamoTable:
    def __init__(self, *, table_name: str):
        self.table_name = str(table_name)
        self._table = table_resource(self.table_name)

    # --- basic operations ---

    def scan_all(self) -> list[dict[str, Any]]:
        """Return every item from a single Scan page.

        Continuation (LastEvaluatedKey) is not followed; a truncated scan is
        logged so it shows up before the table outgrows one page.
        """

        def _op():
            return self._table.scan()

        resp = ddb_call("Scan", _op, table_name=self.table_name)
        if resp.get("LastEvaluatedKey"):
            log.warning(
                "ddb_scan_truncated",
                table=self.table_name,
                returned=len(resp.get("Items") or []),
            )
        return list(resp.get("Items") or [])

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]:
        def _op():
            return self._table.put_item(Item=item)

        return ddb_call("PutItem", _op, table_name=self.table_name)

    def delete_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        def _op():
            return self._table.delete_item(Key=key)

        return ddb_call("DeleteItem", _op, table_name=self.table_name, key=key)

    def update_item(
        self,
        *,
        key: dict[str, Any],
        update_expression: str,
        expression_attribute_names: dict[str, str] | None,
        expression_attribute_values: dict[str, Any],
        return_values: str = "ALL_NEW",
    ) -> dict[str, Any] | None:
        # UpdateItem creates the item when the key is missing.
        def _op():
            kwargs: dict[str, Any] = {
                "Key": key,
                "UpdateExpression": update_expression,
                "ExpressionAttributeValues": expression_attribute_values,
                "ReturnValues": return_values,
            }
            if expression_attribute_names:
                kwargs["ExpressionAttributeNames"] = expression_attribute_names
            resp = self._table.update_item(**kwargs)
            return resp.get("Attributes")

        return ddb_call("UpdateItem", _op, table_name=self.table_name, key=key)


def get_posts_table() -> DynamoTable:
    from ...settings import get_settings

    settings = get_settings()
    if not settings.ddb_table_name:
        raise DdbInternal(message="DDB_TABLE_NAME is not set", operation="Config")
    return DynamoTable(table_name=settings.ddb_table_name)
