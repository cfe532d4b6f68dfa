"""Ordered key-path patches applied to parsed YAML documents.

A path uses yq-style syntax: ``.http.listeners[0].binds[0].host``. Patches
run in list order, so a later patch touching the same key wins.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import yaml

from ..models.compose import dump_yaml
from ..services.exceptions import GenerationError

logger = logging.getLogger(__name__)

PathPart = Union[str, int]

_TOKEN = re.compile(r"\.([^.\[\]]+)|\[(\d+)\]")


class PatchOp(str, Enum):
    SET = "set"
    DELETE = "delete"
    APPEND = "append"


@dataclass(frozen=True)
class Patch:
    """One operation against a document path."""

    op: PatchOp
    path: str
    value: Any = None

    @classmethod
    def set(cls, path: str, value: Any) -> "Patch":
        return cls(PatchOp.SET, path, value)

    @classmethod
    def delete(cls, path: str) -> "Patch":
        return cls(PatchOp.DELETE, path)

    @classmethod
    def append(cls, path: str, value: Any) -> "Patch":
        return cls(PatchOp.APPEND, path, value)


def parse_path(path: str) -> List[PathPart]:
    """Split a yq-style path into mapping keys and list indexes."""
    parts: List[PathPart] = []
    position = 0
    for match in _TOKEN.finditer(path):
        if match.start() != position:
            raise ValueError(f"Invalid patch path: {path}")
        key, index = match.groups()
        parts.append(key if key is not None else int(index))
        position = match.end()
    if position != len(path) or not parts:
        raise ValueError(f"Invalid patch path: {path}")
    return parts


def _empty_container(next_part: PathPart) -> Any:
    return [] if isinstance(next_part, int) else {}


def _child(node: Any, part: PathPart, next_part: PathPart, path: str) -> Any:
    """Return node[part], creating an empty container when absent."""
    if isinstance(part, int):
        if not isinstance(node, list):
            raise GenerationError(f"Cannot index non-list with [{part}] in {path}")
        while len(node) <= part:
            node.append(None)
        if node[part] is None:
            node[part] = _empty_container(next_part)
        return node[part]
    if not isinstance(node, dict):
        raise GenerationError(f"Cannot look up '{part}' in non-mapping in {path}")
    if node.get(part) is None:
        node[part] = _empty_container(next_part)
    return node[part]


def _assign(node: Any, part: PathPart, value: Any, path: str) -> None:
    if isinstance(part, int):
        if not isinstance(node, list):
            raise GenerationError(f"Cannot index non-list with [{part}] in {path}")
        while len(node) <= part:
            node.append(None)
        node[part] = value
    else:
        if not isinstance(node, dict):
            raise GenerationError(f"Cannot set '{part}' on non-mapping in {path}")
        node[part] = value


def _find_parent(document: Any, parts: Sequence[PathPart]) -> Optional[Any]:
    """Walk to the parent of the last part without creating anything."""
    node = document
    for part in parts[:-1]:
        if isinstance(part, int):
            if not isinstance(node, list) or part >= len(node):
                return None
        elif not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def apply_patch(document: dict, patch: Patch) -> None:
    """Apply one patch to a document in place."""
    parts = parse_path(patch.path)

    if patch.op is PatchOp.DELETE:
        parent = _find_parent(document, parts)
        last = parts[-1]
        if isinstance(parent, dict) and not isinstance(last, int):
            parent.pop(last, None)
        elif isinstance(parent, list) and isinstance(last, int) and last < len(parent):
            del parent[last]
        return

    node = document
    for part, next_part in zip(parts[:-1], parts[1:]):
        node = _child(node, part, next_part, patch.path)

    if patch.op is PatchOp.SET:
        _assign(node, parts[-1], patch.value, patch.path)
    elif patch.op is PatchOp.APPEND:
        target = _child(node, parts[-1], 0, patch.path)
        if not isinstance(target, list):
            raise GenerationError(f"Cannot append to non-list at {patch.path}")
        target.extend(patch.value if isinstance(patch.value, list) else [patch.value])


def apply_patches(document: Optional[dict], patches: Sequence[Patch]) -> dict:
    """Apply patches in order and return the document."""
    document = document if document is not None else {}
    for patch in patches:
        apply_patch(document, patch)
    return document


def load_yaml_file(path: Path) -> dict:
    """Parse a YAML mapping from disk."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise GenerationError(f"Could not parse {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GenerationError(f"Expected a mapping at the top of {path}")
    return data


def patch_yaml_file(path: Path, patches: Sequence[Patch], header: Optional[str] = None) -> dict:
    """Load, patch and rewrite a YAML file."""
    document = apply_patches(load_yaml_file(path), patches)
    path.write_text(dump_yaml(document, header=header))
    logger.debug(f"Applied {len(patches)} patch(es) to {path}")
    return document
