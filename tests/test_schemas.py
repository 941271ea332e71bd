"""Tests for tool argument validation."""

import pytest

from supabase_mcp.errors import ValidationError
from supabase_mcp.schemas import (
    DeleteArgs,
    InsertArgs,
    QueryArgs,
    RpcArgs,
    UpdateArgs,
    parse_arguments,
)


class TestQueryArgs:
    def test_defaults(self):
        args = parse_arguments(QueryArgs, "query", table="users")
        assert args.select == "*"
        assert args.limit == 20
        assert args.filter is None
        assert args.order is None

    @pytest.mark.parametrize("limit", [1, 500, 1000])
    def test_limit_in_range(self, limit):
        assert parse_arguments(QueryArgs, "query", table="users", limit=limit).limit == limit

    @pytest.mark.parametrize("limit", [0, -1, 1001])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValidationError, match="limit"):
            parse_arguments(QueryArgs, "query", table="users", limit=limit)

    def test_limit_wrong_type(self):
        with pytest.raises(ValidationError, match="limit"):
            parse_arguments(QueryArgs, "query", table="users", limit="lots")

    @pytest.mark.parametrize("limit", [True, False, "10", 10.0])
    def test_limit_not_coerced(self, limit):
        with pytest.raises(ValidationError, match="limit"):
            parse_arguments(QueryArgs, "query", table="users", limit=limit)

    def test_filter_without_equals(self):
        with pytest.raises(ValidationError, match="filter"):
            parse_arguments(QueryArgs, "query", table="users", filter="eq.5")

    def test_empty_table(self):
        with pytest.raises(ValidationError, match="table"):
            parse_arguments(QueryArgs, "query", table="")


class TestJsonArguments:
    def test_rows_array(self):
        args = parse_arguments(InsertArgs, "insert", table="users", rows='[{"name":"a"}]')
        assert args.rows == [{"name": "a"}]

    def test_rows_single_object(self):
        args = parse_arguments(InsertArgs, "insert", table="users", rows='{"name":"a"}')
        assert args.rows == {"name": "a"}

    def test_rows_empty_array(self):
        assert parse_arguments(InsertArgs, "insert", table="users", rows="[]").rows == []

    def test_rows_malformed(self):
        with pytest.raises(ValidationError, match="rows") as exc_info:
            parse_arguments(InsertArgs, "insert", table="users", rows="[{name: a}")
        assert exc_info.value.context == {"tool": "insert"}
        assert exc_info.value.error_code == "VALIDATION_ERROR"

    def test_rows_wrong_shape(self):
        with pytest.raises(ValidationError, match="rows"):
            parse_arguments(InsertArgs, "insert", table="users", rows="42")

    def test_data_must_be_object(self):
        with pytest.raises(ValidationError, match="data"):
            parse_arguments(UpdateArgs, "update", table="users", filter="id=eq.5", data="[1]")

    def test_update_requires_filter(self):
        with pytest.raises(ValidationError, match="filter"):
            parse_arguments(UpdateArgs, "update", table="users", data="{}")

    def test_delete_filter_checked(self):
        with pytest.raises(ValidationError, match="filter"):
            parse_arguments(DeleteArgs, "delete", table="users", filter="id")

    def test_rpc_params_default(self):
        args = parse_arguments(RpcArgs, "rpc", functionName="ping")
        assert args.function_name == "ping"
        assert args.params == {}

    def test_rpc_params_parsed(self):
        args = parse_arguments(RpcArgs, "rpc", functionName="add", params='{"a": 1}')
        assert args.params == {"a": 1}

    def test_rpc_params_malformed(self):
        with pytest.raises(ValidationError, match="params"):
            parse_arguments(RpcArgs, "rpc", functionName="add", params="{a: 1}")
