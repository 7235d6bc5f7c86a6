"""Dependency rewriting for relocated importers.

Internal dependencies linked through the pnpm ``workspace:`` protocol point
at sibling directories in the monorepo. Once a package is copied out into a
deploy bundle those siblings live under a flat ``workspaces/`` directory, so
the links are rewritten into ``file:`` references relative to the importer's
new location.
"""

from __future__ import annotations

import os
from collections.abc import Collection

from .models import DependencyEntry, DependencyMap
from .paths import relative_path, safe_name

WORKSPACE_PROTOCOL = "workspace:"


def is_workspace_link(entry: object) -> bool:
    """True if the entry's specifier uses the workspace: protocol."""
    return isinstance(entry, DependencyEntry) and entry.specifier.startswith(
        WORKSPACE_PROTOCOL
    )


def rewrite_deps(
    deps: DependencyMap | None,
    internal_names: Collection[str],
    importer_dir: str,
    workspaces_dir: str,
) -> DependencyMap | None:
    """Rewrite workspace-linked internal deps of one dependency category.

    Only entries whose name is internal *and* whose specifier starts with
    "workspace:" are rewritten. An internal package pinned to a registry
    version (e.g. "1.2.3") keeps its entry as is.

    Args:
        deps: The category mapping, or None if the importer doesn't have it.
        internal_names: Names of the target's internal dependencies.
        importer_dir: The importer's directory in the deploy layout.
        workspaces_dir: Directory holding the copied internal dependencies.

    Returns:
        A new mapping with the same keys in the same order, or None when
        ``deps`` is None.

    Example:
        {"@scope/b": {specifier: "workspace:*", version: "link:../b"}}
        with importer_dir="/out", workspaces_dir="/out/workspaces" becomes
        {"@scope/b": {specifier: "file:./workspaces/scope-b",
                      version: "link:./workspaces/scope-b"}}
    """
    if deps is None:
        return None

    result: DependencyMap = {}
    for name, entry in deps.items():
        if name in internal_names and is_workspace_link(entry):
            dep_dir = os.path.join(workspaces_dir, safe_name(name))
            rel = relative_path(importer_dir, dep_dir)
            result[name] = DependencyEntry(specifier=f"file:{rel}", version=f"link:{rel}")
        else:
            result[name] = entry
    return result
