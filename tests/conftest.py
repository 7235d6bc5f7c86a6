"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pnpm_isolate.models import Lockfile, RelocationContext
from pnpm_isolate.registry import WorkspaceRegistry

LOCKFILE_TEXT = """\
lockfileVersion: '9.0'

settings:
  autoInstallPeers: true
  excludeLinksFromLockfile: false

importers:

  .:
    devDependencies:
      turbo:
        specifier: ^2.0.0
        version: 2.0.4

  packages/a:
    dependencies:
      '@scope/b':
        specifier: workspace:*
        version: link:../b
      lodash:
        specifier: ^4.17.21
        version: 4.17.21
    devDependencies:
      '@scope/c':
        specifier: 1.0.0
        version: 1.0.0

  packages/b:
    dependencies:
      '@scope/c':
        specifier: workspace:^
        version: link:../c

  packages/c:
    dependencies: {}

  packages/unrelated:
    dependencies:
      left-pad:
        specifier: ^1.3.0
        version: 1.3.0

packages:

  lodash@4.17.21:
    resolution: {integrity: sha512-v2kDEe57lecTulaDIuNTPy3Ry4gLGJ6Z1O3vE1krgXZNrsQ+LFTGHVxVjcXPs17LhbZVGedAJv8XZ1tvj5FvSg==}

  left-pad@1.3.0:
    resolution: {integrity: sha512-XI5MPzVNApjAyhQzphX8BkmKsKUxD4LdyK24iZeQ9hPs9zmIeY8OLaYw8D4ixY3XbJ2F8tJnhQiO7h5A8DwQ==}
    deprecated: use String.prototype.padStart()

snapshots:

  lodash@4.17.21: {}
"""


@pytest.fixture
def workspace_lockfile_data() -> dict[str, Any]:
    """A small workspace lockfile as plain data (scenario from the docs)."""
    return {
        "lockfileVersion": "9.0",
        "importers": {
            ".": {"dependencies": {}},
            "packages/a": {
                "dependencies": {
                    "@scope/b": {"specifier": "workspace:*", "version": "link:../b"},
                },
            },
            "packages/b": {},
        },
        "packages": {
            "left-pad@1.3.0": {"resolution": {"integrity": "sha512-abc"}},
        },
    }


@pytest.fixture
def workspace_lockfile(workspace_lockfile_data: dict[str, Any]) -> Lockfile:
    return Lockfile.model_validate(workspace_lockfile_data)


@pytest.fixture
def registry() -> WorkspaceRegistry:
    return WorkspaceRegistry.from_dirs(
        {
            "@scope/b": "packages/b",
            "@scope/c": "packages/c",
        }
    )


@pytest.fixture
def relocation() -> RelocationContext:
    return RelocationContext(output_dir="/out", workspaces_dir="/out/workspaces")


@pytest.fixture
def tmp_workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace root containing pnpm-lock.yaml."""
    (tmp_path / "pnpm-lock.yaml").write_text(LOCKFILE_TEXT)
    return tmp_path
