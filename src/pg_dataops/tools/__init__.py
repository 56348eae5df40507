"""Tool entry points: each takes a database handle and a raw parameter payload."""

from pg_dataops.tools.connection_status import connection_status
from pg_dataops.tools.delete_data import delete_data
from pg_dataops.tools.envelope import ToolResponse, is_error, to_json
from pg_dataops.tools.execute_query import execute_query
from pg_dataops.tools.get_schema import get_schema
from pg_dataops.tools.get_table_info import get_table_info
from pg_dataops.tools.insert_data import insert_data
from pg_dataops.tools.query_table import query_table
from pg_dataops.tools.update_data import update_data

TOOLS = {
    "query-table": query_table,
    "insert-data": insert_data,
    "update-data": update_data,
    "delete-data": delete_data,
    "execute-query": execute_query,
    "get-schema": get_schema,
    "get-table-info": get_table_info,
    "connection-status": connection_status,
}

__all__ = [
    "TOOLS",
    "ToolResponse",
    "connection_status",
    "delete_data",
    "execute_query",
    "get_schema",
    "get_table_info",
    "insert_data",
    "is_error",
    "query_table",
    "to_json",
    "update_data",
]
