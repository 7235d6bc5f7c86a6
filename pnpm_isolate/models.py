"""Data models for pnpm-isolate.

These Pydantic models mirror the parts of ``pnpm-lock.yaml`` that pruning
needs to understand. Everything else is kept in each model's extra-field bag
so that fields added by future lockfile versions survive a prune untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DependencyEntry(BaseModel):
    """One resolved dependency of an importer.

    Attributes:
        specifier: The requirement as written in package.json
                   (e.g. "^1.2.0" or "workspace:*").
        version: The resolved value (e.g. "1.2.3" or "link:../b").
    """

    model_config = ConfigDict(extra="allow")

    specifier: str
    version: str


# Lockfiles older than v6 store plain version strings instead of
# {specifier, version} pairs. Those are opaque and always pass through.
DependencyValue = DependencyEntry | str
DependencyMap = dict[str, DependencyValue]


class Importer(BaseModel):
    """Dependency declarations of a single workspace member.

    A category that is missing from the lockfile stays unset, which is
    different from a category that is present but empty.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    dependencies: DependencyMap | None = None
    dev_dependencies: DependencyMap | None = Field(default=None, alias="devDependencies")
    optional_dependencies: DependencyMap | None = Field(
        default=None, alias="optionalDependencies"
    )


class Lockfile(BaseModel):
    """A parsed pnpm lockfile.

    Attributes:
        lockfile_version: Opaque format version. Kept with its original type
                          ("9.0" stays a string, 5.4 stays a float).
        importers: Map of importer path (relative to the workspace root,
                   "." for the root itself) to its dependency declarations.
        packages: Resolved package metadata keyed by package id. Never
                  inspected, only carried along.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    lockfile_version: str | int | float = Field(alias="lockfileVersion")
    importers: dict[str, Importer] | None = None
    packages: dict[str, Any] | None = None

    def to_data(self) -> dict[str, Any]:
        """Convert back to the plain mapping written to disk."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class WorkspacePackage(BaseModel):
    """Location of an internal package inside the monorepo.

    Attributes:
        root_relative_dir: Package directory relative to the workspace root,
                           matching its importer path in the lockfile.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    root_relative_dir: str = Field(alias="rootRelativeDir")


class RelocationContext(BaseModel):
    """Destination layout of an isolated deploy bundle.

    Attributes:
        output_dir: Directory the target package is copied into.
        workspaces_dir: Directory holding the copied internal dependencies,
                        one sub-directory per dependency named by its safe name.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    output_dir: str = Field(alias="outputDir")
    workspaces_dir: str = Field(alias="workspacesDir")
