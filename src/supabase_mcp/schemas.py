"""
validation schemas for the supabase tools.

provides pydantic models for validating tool inputs with:
- required field checks
- numeric bounds for limit
- JSON text arguments parsed and shape-checked
- filter expressions checked for a 'column=' prefix
"""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

import pydantic
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, Json

from .errors import ValidationError
from .filters import split_filter

MIN_LIMIT = 1
MAX_LIMIT = 1000
DEFAULT_LIMIT = 20

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_filter(value: str | None) -> str | None:
    if value:
        split_filter(value)
    return value


Filter = Annotated[str, Field(min_length=1), AfterValidator(validate_filter)]
OptionalFilter = Annotated[str | None, AfterValidator(validate_filter)]


class QueryArgs(BaseModel):
    """validation model for query inputs."""

    table: str = Field(..., min_length=1)
    select: str = Field(default="*", min_length=1)
    filter: OptionalFilter = None
    order: str | None = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT, strict=True)


class InsertArgs(BaseModel):
    """validation model for insert inputs."""

    table: str = Field(..., min_length=1)
    rows: Json[list[dict[str, Any]] | dict[str, Any]]
    upsert: bool = False


class UpdateArgs(BaseModel):
    """validation model for update inputs."""

    table: str = Field(..., min_length=1)
    filter: Filter
    data: Json[dict[str, Any]]


class DeleteArgs(BaseModel):
    """validation model for delete inputs."""

    table: str = Field(..., min_length=1)
    filter: Filter


class RpcArgs(BaseModel):
    """validation model for rpc inputs."""

    model_config = ConfigDict(populate_by_name=True)

    function_name: str = Field(..., alias="functionName", min_length=1)
    params: Json[dict[str, Any]] = Field(default_factory=dict)


def _describe(error: pydantic.ValidationError) -> str:
    parts = []
    for item in error.errors(include_url=False):
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def parse_arguments(model: type[ModelT], tool: str, **kwargs: Any) -> ModelT:
    """Validate raw tool arguments, raising ValidationError on any problem."""
    try:
        return model(**kwargs)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"Invalid arguments: {_describe(e)}", tool=tool, original_error=e
        ) from e
