"""
Supabase MCP - PostgREST table and RPC access for MCP hosts.

Exposes six tools (query, insert, update, delete, rpc, list_tables) that
translate validated arguments into Supabase REST calls.
"""

from .client import NO_BODY, SupabaseClient
from .credentials import SupabaseConfig, resolve_config
from .errors import ConfigurationError, SupabaseMCPError, TransportError, ValidationError
from .filters import apply_filter, split_filter
from .ratelimit import RATE_LIMIT_MS, RateGate, get_rate_gate
from .tools import TOOL_NAMES, format_result, register_tools

__version__ = "1.0.0"

__all__ = [
    "NO_BODY",
    "RATE_LIMIT_MS",
    "TOOL_NAMES",
    "ConfigurationError",
    "RateGate",
    "SupabaseClient",
    "SupabaseConfig",
    "SupabaseMCPError",
    "TransportError",
    "ValidationError",
    "apply_filter",
    "format_result",
    "get_rate_gate",
    "register_tools",
    "resolve_config",
    "split_filter",
]
