"""Reading and writing tree documents and evaluation results."""

from __future__ import annotations

import json
import logging
import math
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self

import tomli_w
from pydantic import (
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from ._node import Internal, InvalidTreeError, Leaf
from ._parse import format_tree_expression, parse_tree_expression

if TYPE_CHECKING:
    from ._eval_engine import EvaluatedNode, Evaluation
    from ._node import Node

logger = logging.getLogger(__name__)

# Top-level table holding the tree in TOML documents
TOML_TREE_KEY = "tree"


# =============================================================================
# Tree documents
# =============================================================================


class NodeDocument(BaseModel):
    """Serialized form of a node.

    Leaves have a ``value``, internal nodes have ``children``; exactly one of
    the two must be given.
    """

    model_config = ConfigDict(extra="forbid")

    label: str
    value: StrictInt | StrictFloat | None = None
    children: list[NodeDocument] | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            msg = "value must be a number, not a boolean"
            raise ValueError(msg)  # noqa: TRY004
        return value

    @field_validator("value")
    @classmethod
    def _require_finite(cls, value: float | None) -> float | None:
        # Integers are exact and always finite
        if isinstance(value, float) and not math.isfinite(value):
            msg = f"value must be finite, got {value}"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _leaf_or_internal(self) -> Self:
        if self.value is None and self.children is None:
            msg = f"node {self.label!r} needs either 'value' or 'children'"
            raise ValueError(msg)
        if self.value is not None and self.children is not None:
            msg = f"node {self.label!r} cannot have both 'value' and 'children'"
            raise ValueError(msg)
        if self.children is not None and not self.children:
            msg = f"node {self.label!r} has an empty 'children' list"
            raise ValueError(msg)
        return self

    def to_node(self) -> Node:
        if self.children is None:
            # Guaranteed by _leaf_or_internal
            assert self.value is not None  # noqa: S101
            return Leaf(label=self.label, value=self.value)
        return Internal(label=self.label, children=tuple(child.to_node() for child in self.children))


def tree_from_dict(data: dict[str, Any]) -> Node:
    """Build a tree from its dictionary form.

    This is a pure function that validates ``data`` with ``NodeDocument``
    and converts it into nodes.

    Raises:
        InvalidTreeError: If the document is not a valid tree.

    """
    try:
        document = NodeDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid tree document: {e}"
        raise InvalidTreeError(msg) from e
    return document.to_node()


def tree_to_dict(root: Node) -> dict[str, Any]:
    """Convert a tree to its dictionary form (inverse of ``tree_from_dict``)."""
    if isinstance(root, Leaf):
        return {"label": root.label, "value": root.value}
    return {"label": root.label, "children": [tree_to_dict(child) for child in root.children]}


def _read_text(input_path: Path) -> str:
    try:
        return input_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"{input_path} is not valid UTF-8: {e}"
        raise InvalidTreeError(msg) from e


def load_tree(input_path: Path | str) -> Node:
    """Load a tree from a file.

    The format is chosen from the suffix: ``.json`` and ``.toml`` hold a tree
    document (in TOML under a top-level ``tree`` table), anything else is
    read as tree expression text.

    Raises:
        InvalidTreeError: If the file content is not a valid tree.

    """
    input_path = Path(input_path)
    suffix = input_path.suffix.lower()

    if suffix == ".json":
        try:
            data = json.loads(_read_text(input_path))
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in {input_path}: {e}"
            raise InvalidTreeError(msg) from e
        root = tree_from_dict(data)
    elif suffix == ".toml":
        try:
            data = tomllib.loads(_read_text(input_path))
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise InvalidTreeError(msg) from e
        if TOML_TREE_KEY not in data:
            msg = f"No [{TOML_TREE_KEY}] table found in {input_path}"
            raise InvalidTreeError(msg)
        root = tree_from_dict(data[TOML_TREE_KEY])
    else:
        root = parse_tree_expression(_read_text(input_path))

    logger.debug(f"Loaded tree from {input_path}")
    return root


def dump_tree(root: Node, output_path: Path | str) -> None:
    """Write a tree to a file, choosing the format from the suffix like ``load_tree``."""
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()

    if suffix == ".json":
        output_path.write_text(json.dumps(tree_to_dict(root), indent=2) + "\n", encoding="utf-8")
    elif suffix == ".toml":
        with output_path.open("wb") as f:
            tomli_w.dump({TOML_TREE_KEY: tree_to_dict(root)}, f)
    else:
        output_path.write_text(format_tree_expression(root) + "\n", encoding="utf-8")

    logger.debug(f"Wrote tree to {output_path}")


# =============================================================================
# Evaluation results
# =============================================================================


def _serialize_bound(bound: float | None) -> float | str | None:
    """Infinite bounds are written as strings since JSON has no infinity."""
    if bound is None or isinstance(bound, int) or math.isfinite(bound):
        return bound
    return "inf" if bound > 0 else "-inf"


def _node_to_dict(evaluated: EvaluatedNode) -> dict[str, Any]:
    result: dict[str, Any] = {
        "id": evaluated.id,
        "label": evaluated.label,
        "display_label": evaluated.display_label,
        "role": str(evaluated.role),
        "value": evaluated.value,
        "visited": evaluated.visited,
        "pruned": evaluated.pruned,
        "alpha": _serialize_bound(evaluated.alpha),
        "beta": _serialize_bound(evaluated.beta),
    }
    if evaluated.children:
        result["children"] = [_node_to_dict(child) for child in evaluated.children]
    return result


def evaluation_to_dict(evaluation: Evaluation) -> dict[str, Any]:
    """Convert an evaluation to a nested dictionary.

    Returns:
        A dictionary with the structure:
        {
            "direction": "rtl",
            "start": "max",
            "value": 4,
            "pruned": ["N", "L"],
            "tree": {...}
        }

    """
    return {
        "direction": str(evaluation.direction),
        "start": "max" if evaluation.maximizing_at_root else "min",
        "value": evaluation.value,
        "pruned": [n.label for n in evaluation.pruned_nodes()],
        "tree": _node_to_dict(evaluation.root),
    }


def _drop_none(value: Any) -> Any:
    """Recursively remove None entries (TOML has no null)."""
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(item) for item in value]
    return value


def export_evaluation(evaluation: Evaluation, output_path: Path | str) -> None:
    """Export an evaluation as JSON (``.json``) or TOML (any other suffix)."""
    output_path = Path(output_path)
    data = evaluation_to_dict(evaluation)

    if output_path.suffix.lower() == ".json":
        output_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    else:
        with output_path.open("wb") as f:
            tomli_w.dump(_drop_none(data), f)

    logger.debug(f"Exported evaluation to {output_path}")
