"""Parser for the ``node('A', [...])`` tree expression language.

Trees are written by hand as nested calls::

    node('A', [
      node('B', 3),
      node('C', [node('D', -1), node('E', 2.5)])
    ])

The text is parsed with :mod:`ast` and walked; it is never executed.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from ._node import Internal, InvalidTreeError, Leaf

if TYPE_CHECKING:
    from ._node import Node

logger = logging.getLogger(__name__)

DEFAULT_TREE = """node('A', [
  node('B', [
    node('D', 3),
    node('E', 5)
  ]),
  node('C', [
    node('F', [
      node('I', [
        node('M', 0),
        node('N', 7)
      ]),
      node('J', 5)
    ]),
    node('G', [
      node('K', 7),
      node('L', 8)
    ]),
    node('H', 4)
  ])
])"""


class TreeSyntaxError(InvalidTreeError):
    """The tree expression text could not be parsed."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{message}{location}")


class _Parser:
    def __init__(self, line_offset: int) -> None:
        self.line_offset = line_offset

    def error(self, message: str, expr: ast.AST) -> TreeSyntaxError:
        line = getattr(expr, "lineno", None)
        column = getattr(expr, "col_offset", None)
        return TreeSyntaxError(
            message,
            line=None if line is None else line + self.line_offset,
            column=None if column is None else column + 1,
        )

    def build(self, expr: ast.expr) -> Node:
        if not (isinstance(expr, ast.Call) and isinstance(expr.func, ast.Name) and expr.func.id == "node"):
            raise self.error(f"Expected node(...), found {ast.unparse(expr)!r}", expr)
        if expr.keywords:
            raise self.error("node() does not take keyword arguments", expr)
        if not 1 <= len(expr.args) <= 2:  # noqa: PLR2004
            raise self.error(f"node() takes 1 or 2 arguments, got {len(expr.args)}", expr)

        label = self.label(expr.args[0])
        if len(expr.args) == 1:
            return Leaf(label=label, value=0)

        second = expr.args[1]
        if isinstance(second, (ast.List, ast.Tuple)):
            return Internal(label=label, children=tuple(self.build(element) for element in second.elts))
        return Leaf(label=label, value=self.number(second))

    def label(self, expr: ast.expr) -> str:
        if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
            return expr.value
        raise self.error(f"Node label must be a string literal, found {ast.unparse(expr)!r}", expr)

    def number(self, expr: ast.expr) -> int | float:
        sign = 1
        operand = expr
        if isinstance(expr, ast.UnaryOp) and isinstance(expr.op, (ast.USub, ast.UAdd)):
            sign = -1 if isinstance(expr.op, ast.USub) else 1
            operand = expr.operand
        if (
            isinstance(operand, ast.Constant)
            and isinstance(operand.value, (int, float))
            and not isinstance(operand.value, bool)
        ):
            return sign * operand.value
        raise self.error(f"Expected a number or a list of children, found {ast.unparse(expr)!r}", expr)


def parse_tree_expression(text: str) -> Node:
    """Parse tree expression text into a tree of nodes.

    Args:
        text: Source text containing a single ``node(...)`` expression.

    Returns:
        The root node.

    Raises:
        TreeSyntaxError: If the text is not a valid tree expression.

    """
    stripped = text.strip()
    if not stripped:
        msg = "Tree expression is empty"
        raise TreeSyntaxError(msg)
    line_offset = text[: len(text) - len(text.lstrip())].count("\n")

    try:
        expression = ast.parse(stripped, mode="eval")
    except SyntaxError as e:
        line = None if e.lineno is None else e.lineno + line_offset
        raise TreeSyntaxError(e.msg, line=line, column=e.offset) from e

    root = _Parser(line_offset).build(expression.body)
    logger.debug("Parsed tree expression with root %r", root.label)
    return root


def _format(node: Node, level: int, indent: str) -> str:
    pad = indent * level
    if isinstance(node, Leaf):
        return f"{pad}node({node.label!r}, {node.value!r})"
    inner = ",\n".join(_format(child, level + 1, indent) for child in node.children)
    return f"{pad}node({node.label!r}, [\n{inner}\n{pad}])"


def format_tree_expression(root: Node, indent: str = "  ") -> str:
    """Write a tree back out in the expression language."""
    return _format(root, 0, indent)
