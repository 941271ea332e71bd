"""PostgREST filter expressions.

A filter is written ``<column>=<operator>.<value>``, e.g. ``id=eq.5`` or
``name=ilike.*test*``. Only the first ``=`` separates column from the
rest; the operator vocabulary is left to PostgREST.
"""

from __future__ import annotations

from typing import Any


def split_filter(expression: str) -> tuple[str, str]:
    """Split a filter on its first ``=`` into (column, operator expression)."""
    key, sep, value = expression.partition("=")
    if not sep:
        raise ValueError(f"filter must look like 'column=op.value', got {expression!r}")
    if not key:
        raise ValueError(f"filter is missing a column name: {expression!r}")
    return key, value


def apply_filter(params: dict[str, Any], expression: str | None) -> dict[str, Any]:
    """Set the filter as a query parameter, replacing any existing value for that key."""
    if expression:
        key, value = split_filter(expression)
        params[key] = value
    return params
