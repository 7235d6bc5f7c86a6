"""Lockfile pruning: workspace lockfile → single-package lockfile.

Given a monorepo-wide pnpm lockfile, keep only the importers of one target
package and its internal (workspace) dependencies. With a relocation context
the kept importers are also re-keyed and their workspace links rewritten for
the flattened deploy layout:

    <output_dir>/                      importer "."
    <workspaces_dir>/<safe-name>/      importer "workspaces/<safe-name>"

Resolved ``packages`` metadata is content-addressed and doesn't depend on
importer paths, so it is carried over untouched.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection

from pydantic import BaseModel, Field

from .deps import rewrite_deps
from .models import DependencyMap, Importer, Lockfile, RelocationContext
from .paths import safe_name
from .registry import Registry

logger = logging.getLogger(__name__)

ROOT_IMPORTER = "."
WORKSPACES_DIRNAME = "workspaces"

_CATEGORY_FIELDS = ("dependencies", "dev_dependencies", "optional_dependencies")


class RelocationPlan(BaseModel):
    """Where each relevant importer ends up.

    Attributes:
        relevant_dirs: Importer paths to keep (the target plus every
                       internal dependency found in the registry).
        resolved_names: Internal dependency names found in the registry.
                        Only these get their workspace links rewritten.
        output_dirs: Importer path → its directory in the deploy layout.
                     Empty without a relocation context.
        importer_paths: Importer path → its key in the pruned lockfile.
                        Empty without a relocation context.
    """

    relevant_dirs: set[str] = Field(default_factory=set)
    resolved_names: set[str] = Field(default_factory=set)
    output_dirs: dict[str, str] = Field(default_factory=dict)
    importer_paths: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def build(
        cls,
        target_dir: str,
        internal_deps: Collection[str],
        registry: Registry,
        relocation: RelocationContext | None = None,
    ) -> RelocationPlan:
        """Derive both relocation tables from a single pass over the deps.

        Internal deps missing from the registry are skipped. The lockfile
        may know more than the dependency graph does, and a partial prune
        is still useful.
        """
        plan = cls(relevant_dirs={target_dir})
        if relocation is not None:
            plan.output_dirs[target_dir] = relocation.output_dir
            plan.importer_paths[target_dir] = ROOT_IMPORTER

        for name in sorted(internal_deps):
            pkg = registry.lookup(name)
            if pkg is None:
                logger.debug("Internal dependency %s is not in the registry, skipping", name)
                continue
            plan.resolved_names.add(name)
            plan.relevant_dirs.add(pkg.root_relative_dir)
            if relocation is not None:
                dirname = safe_name(name)
                plan.output_dirs[pkg.root_relative_dir] = os.path.join(
                    relocation.workspaces_dir, dirname
                )
                plan.importer_paths[pkg.root_relative_dir] = (
                    f"{WORKSPACES_DIRNAME}/{dirname}"
                )
        return plan


def prune_lockfile(
    lockfile: Lockfile,
    target_dir: str,
    internal_deps: Collection[str],
    registry: Registry,
    relocation: RelocationContext | None = None,
) -> Lockfile:
    """Extract the lockfile of one workspace package.

    Args:
        lockfile: The full workspace lockfile. Never modified.
        target_dir: Importer path of the package being isolated.
        internal_deps: Names of its (transitive) internal dependencies.
        registry: Resolves internal dependency names to their directories.
        relocation: Destination layout. When given, kept importers are
                    re-keyed and their workspace: links become file: links.

    Returns:
        A new Lockfile. Importers that need no rewriting, ``packages`` and
        any unknown top-level fields are shared with the input, so treat
        the result as read-only.
    """
    if lockfile.importers is None:
        # Single-package lockfiles are already minimal.
        return lockfile.model_copy()

    plan = RelocationPlan.build(target_dir, internal_deps, registry, relocation)

    importers: dict[str, Importer] = {}
    for path, importer in lockfile.importers.items():
        if path == ROOT_IMPORTER and target_dir != ROOT_IMPORTER:
            continue
        if path not in plan.relevant_dirs:
            continue

        new_path = plan.importer_paths.get(path, path)
        output_dir = plan.output_dirs.get(path)
        if relocation is not None and output_dir is not None:
            importers[new_path] = _relocate_importer(
                importer, plan.resolved_names, output_dir, relocation.workspaces_dir
            )
        else:
            importers[new_path] = importer

    fields: dict[str, object] = {
        "lockfile_version": lockfile.lockfile_version,
        "importers": importers,
    }
    if lockfile.packages is not None:
        fields["packages"] = lockfile.packages
    fields.update(lockfile.model_extra or {})

    logger.debug(
        "Pruned lockfile importers for %s: %d → %d",
        target_dir,
        len(lockfile.importers),
        len(importers),
    )
    return Lockfile.model_construct(_fields_set=set(fields), **fields)


def _relocate_importer(
    importer: Importer,
    internal_names: Collection[str],
    output_dir: str,
    workspaces_dir: str,
) -> Importer:
    """Copy an importer with each present dependency category rewritten."""
    update: dict[str, DependencyMap] = {}
    for field in _CATEGORY_FIELDS:
        rewritten = rewrite_deps(
            getattr(importer, field), internal_names, output_dir, workspaces_dir
        )
        if rewritten is not None:
            update[field] = rewritten
    return importer.model_copy(update=update)
