"""Supabase tool registration."""

import functools
import json
import logging
from typing import TYPE_CHECKING, Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .client import SupabaseClient
from .credentials import resolve_config
from .errors import SupabaseMCPError
from .schemas import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MIN_LIMIT,
    DeleteArgs,
    InsertArgs,
    QueryArgs,
    RpcArgs,
    UpdateArgs,
    parse_arguments,
)

if TYPE_CHECKING:
    from .credentials import CredentialSource
    from .ratelimit import RateGate

logger = logging.getLogger(__name__)

TOOL_NAMES = ["query", "insert", "update", "delete", "rpc", "list_tables"]


def format_result(data: Any) -> str:
    """Render a response body as the tool's text block."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def _reports_errors(func):
    """Convert Supabase errors into the host's tool failure."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SupabaseMCPError as e:
            logger.warning("Tool %s failed (%s): %s", func.__name__, e.error_code, e)
            raise ToolError(str(e)) from e

    return wrapper


def register_tools(
    mcp: FastMCP,
    credentials: "CredentialSource | None" = None,
    gate: "RateGate | None" = None,
) -> list[str]:
    """Register Supabase tools with the MCP server."""

    def _get_client() -> SupabaseClient:
        # Re-resolved on every call so a missing variable fails the call, not startup
        return SupabaseClient(resolve_config(credentials), gate=gate)

    @mcp.tool()
    @_reports_errors
    async def query(
        table: Annotated[str, "Table name"],
        select: Annotated[str, "Comma-separated columns to select"] = "*",
        filter: Annotated[
            str | None, "PostgREST filter (e.g. 'id=eq.5', 'name=ilike.*test*')"
        ] = None,
        order: Annotated[str | None, "Order by string (e.g. 'created_at.desc')"] = None,
        limit: Annotated[
            int,
            Field(ge=MIN_LIMIT, le=MAX_LIMIT, strict=True, description="Max rows to return"),
        ] = DEFAULT_LIMIT,
    ) -> str:
        """Query rows from a table using PostgREST syntax."""
        args = parse_arguments(
            QueryArgs,
            "query",
            table=table,
            select=select,
            filter=filter,
            order=order,
            limit=limit,
        )
        client = _get_client()
        return format_result(
            await client.select(args.table, args.select, args.filter, args.order, args.limit)
        )

    @mcp.tool()
    @_reports_errors
    async def insert(
        table: Annotated[str, "Table name"],
        rows: Annotated[str, "JSON array of row objects"],
        upsert: Annotated[bool, "Merge duplicates on the primary key"] = False,
    ) -> str:
        """Insert rows into a table."""
        args = parse_arguments(InsertArgs, "insert", table=table, rows=rows, upsert=upsert)
        client = _get_client()
        return format_result(await client.insert(args.table, args.rows, args.upsert))

    @mcp.tool()
    @_reports_errors
    async def update(
        table: Annotated[str, "Table name"],
        filter: Annotated[str, "PostgREST filter (e.g. 'id=eq.5')"],
        data: Annotated[str, "JSON object with fields to update"],
    ) -> str:
        """Update rows in a table."""
        args = parse_arguments(UpdateArgs, "update", table=table, filter=filter, data=data)
        client = _get_client()
        return format_result(await client.update(args.table, args.filter, args.data))

    @mcp.tool()
    @_reports_errors
    async def delete(
        table: Annotated[str, "Table name"],
        filter: Annotated[str, "PostgREST filter"],
    ) -> str:
        """Delete rows from a table."""
        args = parse_arguments(DeleteArgs, "delete", table=table, filter=filter)
        client = _get_client()
        return format_result(await client.delete(args.table, args.filter))

    @mcp.tool()
    @_reports_errors
    async def rpc(
        functionName: Annotated[str, "Postgres function name"],
        params: Annotated[str, "JSON params"] = "{}",
    ) -> str:
        """Call a Postgres function."""
        args = parse_arguments(RpcArgs, "rpc", functionName=functionName, params=params)
        client = _get_client()
        return format_result(await client.rpc(args.function_name, args.params))

    @mcp.tool()
    @_reports_errors
    async def list_tables() -> str:
        """List tables (requires service key with pg_catalog access)."""
        client = _get_client()
        return format_result(await client.list_tables())

    return list(TOOL_NAMES)
