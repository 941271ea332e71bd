"""Tests for PostgREST filter translation."""

import pytest

from supabase_mcp.filters import apply_filter, split_filter


class TestSplitFilter:
    def test_simple(self):
        assert split_filter("id=eq.5") == ("id", "eq.5")

    def test_splits_on_first_equals_only(self):
        assert split_filter("note=eq.a=b=c") == ("note", "eq.a=b=c")

    def test_operator_not_checked(self):
        assert split_filter("name=whatever") == ("name", "whatever")

    def test_empty_value_allowed(self):
        assert split_filter("name=") == ("name", "")

    def test_missing_equals(self):
        with pytest.raises(ValueError, match="column=op.value"):
            split_filter("id")

    def test_missing_column(self):
        with pytest.raises(ValueError, match="missing a column"):
            split_filter("=eq.5")


class TestApplyFilter:
    def test_sets_parameter(self):
        params = {"select": "*", "limit": "10"}
        apply_filter(params, "id=eq.5")
        assert list(params.items()) == [("select", "*"), ("limit", "10"), ("id", "eq.5")]

    def test_overwrites_existing_key_in_place(self):
        params = {"select": "*", "limit": "10"}
        apply_filter(params, "select=id,name")
        assert list(params.items()) == [("select", "id,name"), ("limit", "10")]

    @pytest.mark.parametrize("expression", [None, ""])
    def test_noop_when_absent(self, expression):
        params = {"select": "*"}
        assert apply_filter(params, expression) == {"select": "*"}
