"""CLI entry point for pnpm-isolate."""

from __future__ import annotations

import logging

import click

from pnpm_isolate.errors import LockfileError
from pnpm_isolate.lockfile import LOCKFILE_NAME, read_lockfile, write_lockfile
from pnpm_isolate.models import RelocationContext
from pnpm_isolate.prune import prune_lockfile
from pnpm_isolate.registry import WorkspaceRegistry


def _parse_package(value: str) -> tuple[str, str]:
    # Scoped names contain "/", so split on the last "=" only.
    name, sep, path = value.rpartition("=")
    if not sep or not name or not path:
        raise click.BadParameter(
            f"expected NAME=DIR, got {value!r}", param_hint="--package"
        )
    return name, path


@click.group()
@click.version_option(package_name="pnpm-isolate")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Extract a minimal pnpm lockfile for a single workspace package."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--workspace-root",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help=f"Directory containing {LOCKFILE_NAME}.",
)
@click.option(
    "--target", required=True, help="Importer path of the package to isolate."
)
@click.option(
    "--dep",
    "deps",
    multiple=True,
    help="Internal dependency name of the target (repeatable).",
)
@click.option(
    "--package",
    "packages",
    multiple=True,
    metavar="NAME=DIR",
    help="Workspace package location relative to the root (repeatable).",
)
@click.option("--output-dir", default=None, help="Target's directory in the deploy bundle.")
@click.option(
    "--workspaces-dir",
    default=None,
    help="Directory holding the copied internal dependencies.",
)
@click.option(
    "--out",
    "out_path",
    type=click.Path(dir_okay=False),
    required=True,
    help="Where to write the pruned lockfile.",
)
@click.option(
    "--strict", is_flag=True, help="Fail instead of warning on a malformed lockfile."
)
def prune(
    workspace_root: str,
    target: str,
    deps: tuple[str, ...],
    packages: tuple[str, ...],
    output_dir: str | None,
    workspaces_dir: str | None,
    out_path: str,
    strict: bool,
) -> None:
    """Prune the workspace lockfile down to TARGET and its internal deps."""
    if (output_dir is None) != (workspaces_dir is None):
        raise click.UsageError(
            "--output-dir and --workspaces-dir must be given together."
        )

    registry = WorkspaceRegistry.from_dirs(dict(_parse_package(p) for p in packages))
    relocation = None
    if output_dir is not None and workspaces_dir is not None:
        relocation = RelocationContext(
            output_dir=output_dir, workspaces_dir=workspaces_dir
        )

    try:
        lockfile = read_lockfile(workspace_root)
    except LockfileError as exc:
        if strict:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Warning: skipping lockfile pruning.\n{exc}", err=True)
        return

    if lockfile is None:
        click.echo(f"No {LOCKFILE_NAME} in {workspace_root}, nothing to prune.")
        return

    pruned = prune_lockfile(lockfile, target, set(deps), registry, relocation)
    dest = write_lockfile(pruned, out_path)

    kept = ", ".join(pruned.importers or {}) or "<none>"
    click.echo(f"✓ Wrote {dest} (importers: {kept})")
