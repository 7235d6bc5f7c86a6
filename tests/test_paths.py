"""Tests for pnpm_isolate.paths."""

from __future__ import annotations

import pytest

from pnpm_isolate.paths import relative_path, safe_name


class TestSafeName:
    def test_unscoped_name_unchanged(self) -> None:
        assert safe_name("lodash") == "lodash"

    def test_scoped_name(self) -> None:
        assert safe_name("@scope/b") == "scope-b"

    def test_strips_only_one_leading_at(self) -> None:
        assert safe_name("@@scope/b") == "@scope-b"

    def test_replaces_every_slash(self) -> None:
        assert safe_name("a/b/c") == "a-b-c"

    def test_inner_at_is_kept(self) -> None:
        assert safe_name("@scope/name@next") == "scope-name@next"

    @pytest.mark.parametrize("name", ["lodash", "@scope/b", "@org/deep/name"])
    def test_idempotent(self, name: str) -> None:
        once = safe_name(name)
        assert safe_name(once) == once
        assert not once.startswith("@")
        assert "/" not in once


class TestRelativePath:
    def test_child_directory_gets_dot_slash(self) -> None:
        assert relative_path("/out", "/out/workspaces/scope-b") == "./workspaces/scope-b"

    def test_sibling_directory_keeps_parent_marker(self) -> None:
        assert relative_path("/out/workspaces/a", "/out/workspaces/b") == "../b"

    def test_parent_directory(self) -> None:
        assert relative_path("/out/workspaces/a", "/out") == "../.."

    def test_same_directory(self) -> None:
        assert relative_path("/out", "/out") == "./"

    def test_dot_prefixed_name_is_not_a_parent_marker(self) -> None:
        assert relative_path("/out", "/out/.cache") == "./.cache"

    def test_normalizes_redundant_segments(self) -> None:
        assert relative_path("/out/", "/out/./workspaces//b") == "./workspaces/b"

    def test_relative_inputs(self) -> None:
        assert relative_path("dist/app", "dist/app/workspaces/b") == "./workspaces/b"

    def test_empty_path_is_current_directory(self) -> None:
        assert relative_path("", "a") == "./a"
        assert relative_path("", "") == "./"

    @pytest.mark.parametrize(
        ("start", "dest"),
        [
            ("/a", "/a/b"),
            ("/a/b", "/a"),
            ("/a/b", "/c/d"),
            ("/a", "/a"),
            ("x", "y"),
            ("/out", ""),
            ("", "a"),
        ],
    )
    def test_always_starts_with_dot(self, start: str, dest: str) -> None:
        assert relative_path(start, dest).startswith(".")
