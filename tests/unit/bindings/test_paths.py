"""Unit tests for slash-delimited path resolution."""

from __future__ import annotations

from typing import Any

import pytest

from bindery.bindings.paths import resolve_path, split_path
from bindery.bindings.values import UNDEFINED


class TestSplitPath:
    """Test path segmentation."""

    def test_absolute_path(self) -> None:
        assert split_path("/user/name") == ["user", "name"]

    def test_relative_path(self) -> None:
        assert split_path("user/name") == ["user", "name"]

    def test_empty_segments_are_dropped(self) -> None:
        assert split_path("//a//b/") == ["a", "b"]

    def test_root(self) -> None:
        assert split_path("/") == []


class TestAbsolutePaths:
    """Test paths that start at the data model."""

    def test_nested_mapping(self, data_model: dict[str, Any]) -> None:
        assert resolve_path(data_model, "/user/name") == "Ada"

    def test_list_index(self, data_model: dict[str, Any]) -> None:
        assert resolve_path(data_model, "/items/1/title") == "Second"

    def test_doubled_slashes(self, data_model: dict[str, Any]) -> None:
        """//a//b behaves as /a/b."""
        assert resolve_path(data_model, "//user//name") == "Ada"

    def test_root_returns_data_model(self, data_model: dict[str, Any]) -> None:
        assert resolve_path(data_model, "/") is data_model

    def test_absolute_path_ignores_scope(
        self, data_model: dict[str, Any], scope: dict[str, Any]
    ) -> None:
        assert resolve_path(data_model, "/user/name", scope) == "Ada"

    def test_null_value_is_returned(self, data_model: dict[str, Any]) -> None:
        assert resolve_path(data_model, "/user/nickname") is None

    def test_falsy_values_are_returned(self) -> None:
        model = {"zero": 0, "off": False, "empty": ""}
        assert resolve_path(model, "/zero") == 0
        assert resolve_path(model, "/off") is False
        assert resolve_path(model, "/empty") == ""


class TestRelativePaths:
    """Test paths resolved against the scope."""

    def test_relative_path_uses_scope(
        self, data_model: dict[str, Any], scope: dict[str, Any]
    ) -> None:
        assert resolve_path(data_model, "name", scope) == "Grace"

    def test_relative_path_without_scope_uses_data_model(
        self, data_model: dict[str, Any]
    ) -> None:
        assert resolve_path(data_model, "user/name") == "Ada"

    def test_no_fallback_from_scope(
        self, data_model: dict[str, Any], scope: dict[str, Any]
    ) -> None:
        """A relative path missing from the scope is not looked up in the model."""
        assert resolve_path(data_model, "score", scope) is UNDEFINED

    def test_empty_path_returns_scope(
        self, data_model: dict[str, Any], scope: dict[str, Any]
    ) -> None:
        assert resolve_path(data_model, "", scope) is scope

    def test_empty_path_without_scope_returns_data_model(
        self, data_model: dict[str, Any]
    ) -> None:
        assert resolve_path(data_model, "") is data_model

    def test_empty_scope_is_still_a_scope(self, data_model: dict[str, Any]) -> None:
        assert resolve_path(data_model, "score", {}) is UNDEFINED


class TestMissingPaths:
    """Missing data degrades to UNDEFINED and never raises."""

    @pytest.mark.parametrize(
        "path",
        [
            "/missing",
            "/user/missing",
            "/user/name/first",
            "/score/value",
            "/user/nickname/x",
            "/items/9",
            "/items/-1",
            "/items/first",
            "/tags/０",
            "/items/01",
            "/items/00",
        ],
    )
    def test_missing(self, data_model: dict[str, Any], path: str) -> None:
        assert resolve_path(data_model, path) is UNDEFINED

    def test_strings_are_not_indexed(self, data_model: dict[str, Any]) -> None:
        assert resolve_path(data_model, "/greeting/0") is UNDEFINED


class TestPathIdentity:
    """A value placed at a path resolves back to the same object."""

    @pytest.mark.parametrize(
        "value",
        ["text", 0, 2.5, False, None, [1, 2], {"deep": {"er": 1}}],
    )
    def test_identity(self, value: object) -> None:
        model = {"a": {"b": [{"c": value}]}}
        assert resolve_path(model, "/a/b/0/c") is value
