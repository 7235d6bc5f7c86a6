"""Reading and writing pnpm-lock.yaml.

Uses PyYAML. The writer emits every string value double-quoted and never
folds long lines, so path-like values such as "link:./workspaces/scope-b"
read back exactly as written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import LockfileError
from .models import Lockfile

logger = logging.getLogger(__name__)

LOCKFILE_NAME = "pnpm-lock.yaml"

_STR_TAG = "tag:yaml.org,2002:str"
_MAP_TAG = "tag:yaml.org,2002:map"


class LockfileDumper(yaml.SafeDumper):
    """SafeDumper with pnpm-friendly scalar styles.

    - mapping keys stay plain unless YAML needs quotes (e.g. "@scope/b")
    - string values are always double-quoted
    - shared objects are written out again instead of as anchors/aliases
    """

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_str(dumper: LockfileDumper, data: str) -> yaml.ScalarNode:
    return dumper.represent_scalar(_STR_TAG, data, style='"')


def _represent_dict(dumper: LockfileDumper, data: dict) -> yaml.MappingNode:
    pairs: list[tuple[yaml.Node, yaml.Node]] = []
    for key, value in data.items():
        if isinstance(key, str):
            key_node = dumper.represent_scalar(_STR_TAG, key)
        else:
            key_node = dumper.represent_data(key)
        pairs.append((key_node, dumper.represent_data(value)))
    return yaml.MappingNode(_MAP_TAG, pairs, flow_style=False)


LockfileDumper.add_representer(str, _represent_str)
LockfileDumper.add_representer(dict, _represent_dict)


def lockfile_path(workspace_root: Path | str) -> Path:
    """Location of pnpm-lock.yaml inside a workspace root."""
    return Path(workspace_root) / LOCKFILE_NAME


def parse_lockfile(raw: str, *, source: str = "<string>") -> Lockfile:
    """Parse lockfile text into a Lockfile.

    Raises:
        LockfileError: If the text isn't YAML, isn't a mapping, or doesn't
                       match the lockfile model.
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise LockfileError(
            "Invalid lockfile YAML.", hint=str(exc), context={"path": source}
        ) from exc

    if not isinstance(data, dict):
        raise LockfileError(
            "Lockfile is not a mapping.",
            context={"path": source, "type": type(data).__name__},
        )

    try:
        return Lockfile.model_validate(data)
    except ValidationError as exc:
        raise LockfileError(
            "Lockfile does not match the expected structure.",
            hint=str(exc),
            context={"path": source},
        ) from exc


def read_lockfile(workspace_root: Path | str) -> Lockfile | None:
    """Load pnpm-lock.yaml from the workspace root.

    Returns:
        The parsed lockfile, or None if the workspace has no lockfile. A
        missing lockfile isn't an error: isolation can go ahead without one.

    Raises:
        LockfileError: If the file exists but can't be read or parsed.
    """
    path = lockfile_path(workspace_root)
    if not path.exists():
        logger.debug("No %s found at %s", LOCKFILE_NAME, path)
        return None

    try:
        raw = path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as exc:
        logger.debug("Failed to read %s: %s", path, exc)
        raise LockfileError(
            "Lockfile could not be read.", hint=str(exc), context={"path": str(path)}
        ) from exc

    try:
        return parse_lockfile(raw, source=str(path))
    except LockfileError as exc:
        logger.debug("Failed to parse %s: %s", path, exc)
        raise


def serialize_lockfile(lockfile: Lockfile) -> str:
    """Render a Lockfile as YAML text."""
    return yaml.dump(
        lockfile.to_data(),
        Dumper=LockfileDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )


def write_lockfile(lockfile: Lockfile, output_path: Path | str) -> Path:
    """Write a Lockfile to output_path, replacing any existing file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_lockfile(lockfile), encoding="utf-8")
    logger.debug("Wrote pruned lockfile to %s", path)
    return path
