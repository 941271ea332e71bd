"""Credentials and configuration for the Supabase MCP server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Protocol

from .errors import ConfigurationError

DEFAULT_TIMEOUT = 30.0


class CredentialSource(Protocol):
    """Anything that can look up a credential by name (a dict works)."""

    def get(self, key: str) -> Any: ...


@dataclass(frozen=True)
class CredentialSpec:
    """Describes one environment-provided setting."""

    env_var: str
    description: str = ""
    required: bool = False


SUPABASE_CREDENTIALS = {
    "supabase_url": CredentialSpec(
        env_var="SUPABASE_URL",
        description="The unique Supabase URL for your project",
        required=True,
    ),
    "supabase_service_key": CredentialSpec(
        env_var="SUPABASE_SERVICE_KEY",
        description="The service role key for backend access (Warning: Has full admin rights)",
        required=False,
    ),
    "supabase_anon_key": CredentialSpec(
        env_var="SUPABASE_ANON_KEY",
        description="The anonymous key for client-side access (Respects RLS)",
        required=False,
    ),
    "supabase_timeout": CredentialSpec(
        env_var="SUPABASE_TIMEOUT",
        description="Per-request timeout in seconds",
        required=False,
    ),
}


@dataclass(frozen=True)
class SupabaseConfig:
    """Resolved connection settings for one tool invocation."""

    url: str
    key: str
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return f"SupabaseConfig(url={self.url!r}, key='***', timeout={self.timeout})"


def _lookup(name: str, credentials: CredentialSource | None) -> str | None:
    if credentials is not None:
        value = credentials.get(name)
        if value:
            return str(value)
    return os.getenv(SUPABASE_CREDENTIALS[name].env_var)


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"SUPABASE_TIMEOUT must be a number of seconds, got {raw!r}",
            original_error=e,
        ) from e
    if timeout <= 0:
        raise ConfigurationError(f"SUPABASE_TIMEOUT must be positive, got {raw!r}")
    return timeout


def missing_credentials(credentials: CredentialSource | None = None) -> list[str]:
    """Env var names of required settings that resolve to nothing."""
    return [
        spec.env_var
        for name, spec in SUPABASE_CREDENTIALS.items()
        if spec.required and not _lookup(name, credentials)
    ]


def describe_credentials() -> str:
    """One line per setting, for help output."""
    width = max(len(spec.env_var) for spec in SUPABASE_CREDENTIALS.values())
    lines = []
    for spec in SUPABASE_CREDENTIALS.values():
        suffix = " (required)" if spec.required else ""
        lines.append(f"  {spec.env_var:<{width}}  {spec.description}{suffix}")
    return "\n".join(lines)


def resolve_config(credentials: CredentialSource | None = None) -> SupabaseConfig:
    """
    Resolve the Supabase endpoint and key.

    Values from the credential store take priority over the environment.
    The service key is preferred over the anon key.

    Raises:
        ConfigurationError: If the URL or both keys are missing.
    """
    url = (_lookup("supabase_url", credentials) or "").rstrip("/")
    key = _lookup("supabase_service_key", credentials) or _lookup(
        "supabase_anon_key", credentials
    )

    if not url or not key:
        missing = missing_credentials(credentials)
        if not key:
            missing.append(
                f"{SUPABASE_CREDENTIALS['supabase_service_key'].env_var} or "
                f"{SUPABASE_CREDENTIALS['supabase_anon_key'].env_var}"
            )
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY (or SUPABASE_ANON_KEY) required",
            context={"missing": ", ".join(missing)},
        )

    return SupabaseConfig(
        url=url,
        key=key,
        timeout=_parse_timeout(_lookup("supabase_timeout", credentials)),
    )
