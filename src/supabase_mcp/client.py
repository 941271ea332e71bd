"""Supabase PostgREST client."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from .credentials import SupabaseConfig
from .errors import TransportError
from .filters import apply_filter, split_filter
from .ratelimit import RateGate, get_rate_gate

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"

# PostgREST operator syntax stays readable in the query string
QUERY_SAFE = "*,.:()"

PREFER_COUNT = "count=exact"
PREFER_REPRESENTATION = "return=representation"
PREFER_MERGE_DUPLICATES = "resolution=merge-duplicates"


class _NoBody:
    """Marker for a request sent without a body."""

    def __repr__(self) -> str:
        return "NO_BODY"


NO_BODY: Any = _NoBody()


def _segment(name: str) -> str:
    return quote(name, safe="")


class SupabaseClient:
    """Client for the Supabase REST (PostgREST) API."""

    def __init__(self, config: SupabaseConfig, gate: RateGate | None = None):
        """
        Initialize Supabase client.

        Args:
            config: Resolved URL, key and timeout
            gate: Rate gate to pass through before each request
                  (defaults to the process-wide gate)
        """
        self.config = config
        self.gate = gate or get_rate_gate()

    @property
    def headers(self) -> dict[str, str]:
        return {
            "apikey": self.config.key,
            "Authorization": f"Bearer {self.config.key}",
            "Content-Type": "application/json",
        }

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = NO_BODY,
        extra_headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """
        Issue one HTTP request against the project.

        Args:
            path: Path below the project URL (e.g. "/rest/v1/users")
            method: HTTP method
            body: JSON-serializable body; NO_BODY sends none
            extra_headers: Headers merged over the defaults
            params: Query parameters

        Returns:
            The parsed JSON response, or {} for an empty body

        Raises:
            TransportError: On a non-success status, a malformed body or a
                network failure
        """
        headers = self.headers
        if extra_headers:
            headers.update(extra_headers)

        content = None
        if body is not NO_BODY:
            content = json.dumps(body, separators=(",", ":"), ensure_ascii=False)

        await self.gate.admit()

        url = f"{self.config.url}{path}"
        if params:
            url = f"{url}?{urlencode(params, safe=QUERY_SAFE, quote_via=quote)}"
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                response = await client.request(
                    method,
                    url,
                    headers=headers,
                    content=content,
                )
        except httpx.RequestError as e:
            raise TransportError(
                f"Network error: {e}", context={"method": method, "path": path}, original_error=e
            ) from e

        logger.debug("%s %s -> %d", method, path, response.status_code)

        if not response.is_success:
            raise TransportError.from_status(response.status_code, response.text)

        text = response.text
        if not text:
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise TransportError(
                f"Supabase {response.status_code}: malformed JSON response",
                status_code=response.status_code,
                body=text[:500],
                original_error=e,
            ) from e

    async def select(
        self,
        table: str,
        select: str = "*",
        filter: str | None = None,
        order: str | None = None,
        limit: int = 20,
    ) -> Any:
        """
        Select rows from a table.

        Using PostgREST query syntax.
        """
        params = {"select": select, "limit": str(limit)}
        apply_filter(params, filter)
        if order:
            params["order"] = order

        return await self.request(
            f"{REST_PREFIX}/{_segment(table)}",
            "GET",
            params=params,
            extra_headers={"Prefer": PREFER_COUNT},
        )

    async def insert(
        self,
        table: str,
        rows: list[dict[str, Any]] | dict[str, Any],
        upsert: bool = False,
    ) -> Any:
        """Insert rows, optionally merging duplicates on the primary key."""
        prefer = PREFER_REPRESENTATION
        if upsert:
            prefer += f",{PREFER_MERGE_DUPLICATES}"

        return await self.request(
            f"{REST_PREFIX}/{_segment(table)}",
            "POST",
            body=rows,
            extra_headers={"Prefer": prefer},
        )

    async def update(self, table: str, filter: str, data: dict[str, Any]) -> Any:
        """Update rows matching filter."""
        key, value = split_filter(filter)
        return await self.request(
            f"{REST_PREFIX}/{_segment(table)}",
            "PATCH",
            body=data,
            params={key: value},
            extra_headers={"Prefer": PREFER_REPRESENTATION},
        )

    async def delete(self, table: str, filter: str) -> Any:
        """Delete rows matching filter."""
        key, value = split_filter(filter)
        return await self.request(
            f"{REST_PREFIX}/{_segment(table)}",
            "DELETE",
            params={key: value},
            extra_headers={"Prefer": PREFER_REPRESENTATION},
        )

    async def rpc(self, function_name: str, params: dict[str, Any]) -> Any:
        """Call a Postgres function."""
        return await self.request(
            f"{REST_PREFIX}/rpc/{_segment(function_name)}",
            "POST",
            body=params,
        )

    async def list_tables(self) -> Any:
        # Best effort: the RPC namespace root has no defined PostgREST meaning.
        return await self.request(f"{REST_PREFIX}/rpc/", "GET")
