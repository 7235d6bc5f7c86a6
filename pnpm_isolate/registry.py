"""Workspace registry: internal package name → on-disk location.

How the names are discovered (pnpm-workspace.yaml globs, package.json files)
is up to the caller. Pruning only ever calls ``lookup``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from pydantic import BaseModel, Field

from .models import WorkspacePackage


class Registry(Protocol):
    """Anything that can resolve an internal package name to its location."""

    def lookup(self, name: str) -> WorkspacePackage | None: ...


class WorkspaceRegistry(BaseModel):
    """In-memory registry backed by a plain mapping.

    Attributes:
        packages: Map of package name (e.g. "@scope/b") → WorkspacePackage.
    """

    packages: dict[str, WorkspacePackage] = Field(default_factory=dict)

    @classmethod
    def from_dirs(cls, dirs: Mapping[str, str]) -> WorkspaceRegistry:
        """Build a registry from a name → root-relative directory mapping.

        Example:
            WorkspaceRegistry.from_dirs({"@scope/b": "packages/b"})
        """
        return cls(
            packages={
                name: WorkspacePackage(root_relative_dir=path)
                for name, path in dirs.items()
            }
        )

    def lookup(self, name: str) -> WorkspacePackage | None:
        return self.packages.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.packages

    def __len__(self) -> int:
        return len(self.packages)
