"""Interactive evaluation state with a last-known-good result.

A ``TreeSession`` holds what a user edits (tree text, direction, starting
role) and re-evaluates whenever one of them changes. If an update fails,
the previous successful evaluation stays current and the error is kept
for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ._direction import Direction
from ._eval_engine import Evaluation, evaluate
from ._node import MinimaxVizError
from ._parse import DEFAULT_TREE, parse_tree_expression

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TreeSession:
    """Editable evaluation state.

    Attributes:
        text: Current tree expression text (may be invalid).
        direction: Current pruning direction.
        maximizing_at_root: Whether the root maximizes.
        current: Last successful evaluation, or None before the first success.
        last_error: Error of the most recent update, or None if it succeeded.

    """

    text: str = DEFAULT_TREE
    direction: Direction = Direction.NONE
    maximizing_at_root: bool = True
    current: Evaluation | None = None
    last_error: MinimaxVizError | None = None

    def __post_init__(self) -> None:
        self.refresh()

    def refresh(self) -> bool:
        """Rebuild the tree from ``text`` and evaluate it.

        Returns:
            True if the evaluation succeeded and ``current`` was replaced.

        """
        try:
            root = parse_tree_expression(self.text)
            evaluation = evaluate(root, self.direction, maximizing_at_root=self.maximizing_at_root)
        except MinimaxVizError as e:
            logger.warning("Keeping previous tree: %s", e)
            self.last_error = e
            return False

        self.current = evaluation
        self.last_error = None
        logger.debug("Session evaluated %s = %s", evaluation.root.label, evaluation.value)
        return True

    def set_text(self, text: str) -> bool:
        self.text = text
        return self.refresh()

    def set_direction(self, direction: Direction | str) -> bool:
        self.direction = Direction(direction)
        return self.refresh()

    def toggle_start(self) -> bool:
        """Switch the root between maximizing and minimizing."""
        self.maximizing_at_root = not self.maximizing_at_root
        return self.refresh()

    def reset(self) -> bool:
        """Restore the default example tree."""
        return self.set_text(DEFAULT_TREE)
