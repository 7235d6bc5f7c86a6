"""Path helpers for the flattened deploy layout."""

from __future__ import annotations

import os
from pathlib import PurePath


def safe_name(package_name: str) -> str:
    """Turn a (possibly scoped) package name into a directory name.

    Drops a single leading "@" and replaces every "/" with "-".

    Examples:
        "@scope/b" → "scope-b"
        "lodash" → "lodash"
    """
    if package_name.startswith("@"):
        package_name = package_name[1:]
    return package_name.replace("/", "-")


def relative_path(from_dir: str, to_dir: str) -> str:
    """Relative reference from one directory to another.

    The result is always explicitly relative so file: and link: resolvers
    never mistake it for a bare package name:

        relative_path("/out", "/out/workspaces/b") → "./workspaces/b"
        relative_path("/out/workspaces/a", "/out/workspaces/b") → "../b"
        relative_path("/out", "/out") → "./"

    Separators are always forward slashes.
    """
    # An empty path means the current directory.
    rel = os.path.relpath(to_dir or os.curdir, from_dir or os.curdir)
    rel = PurePath(rel).as_posix()
    if rel == ".":
        return "./"
    if rel == ".." or rel.startswith("../"):
        return rel
    return f"./{rel}"
