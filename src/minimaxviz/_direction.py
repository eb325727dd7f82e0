"""Traversal direction and player role enums."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Self, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")


class StrEnumWithDoc(StrEnum):
    """Base class for string enums with a docstring per member."""

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a new enum member with a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj


class Direction(StrEnumWithDoc):
    """Pruning mode and the order in which children are visited.

    The mapping to visit order is fixed: ``LEFT_TO_RIGHT`` visits children
    in reversed order, ``NONE`` and ``RIGHT_TO_LEFT`` in natural order. The
    two pruning modes therefore produce mirror-image cutoff patterns.
    """

    NONE = "none", "Plain minimax, every node is visited."
    LEFT_TO_RIGHT = "ltr", "Alpha-beta pruning, children visited in reversed order."
    RIGHT_TO_LEFT = "rtl", "Alpha-beta pruning, children visited in natural order."

    @property
    def prunes(self) -> bool:
        """Whether cutoffs are applied in this mode."""
        return self is not Direction.NONE

    def visit_order(self, children: Sequence[T]) -> list[T]:
        """Return children in the order this direction visits them."""
        if self is Direction.LEFT_TO_RIGHT:
            return list(reversed(children))
        return list(children)


class Role(StrEnumWithDoc):
    """Whether a node maximizes or minimizes over its children."""

    MAX = "max", "Maximizing node, raises alpha."
    MIN = "min", "Minimizing node, lowers beta."

    @classmethod
    def for_root(cls, *, maximizing: bool) -> Role:
        return cls.MAX if maximizing else cls.MIN

    @property
    def opposite(self) -> Role:
        return Role.MIN if self is Role.MAX else Role.MAX

    @property
    def caption(self) -> str:
        """Prefix shown in front of the root label (e.g. ``"Max: "``)."""
        return f"{self.value.capitalize()}: "
