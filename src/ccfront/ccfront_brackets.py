"""
Bracket bookkeeping for parser diagnostics.

`BracketTracker` keeps two stacks in lockstep: the opening brackets the
parser has consumed and not yet closed, and the lines they appeared on. It
plays no part in deciding what parses; it only lets the parser name the
innermost unclosed bracket when input runs out.
"""

from ccfront.ccfront_constants import OPENING_BRACKETS
from ccfront.ccfront_errors import MismatchedBracketError


class BracketTracker:
    """
    Synchronized stacks of open brackets and their source lines.

    Attributes:
        openers (list[str]): Open brackets, innermost last.
        lines (list[int]): Line of each entry in `openers`.
    """

    def __init__(self) -> None:
        self.openers: list[str] = []
        self.lines: list[int] = []

    def __len__(self) -> int:
        return len(self.openers)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{b}@{ln}" for b, ln in zip(self.openers, self.lines))
        return f"BracketTracker([{pairs}])"

    def is_empty(self) -> bool:
        return not self.openers

    def push(self, bracket: str, line: int) -> None:
        """Records an opening bracket consumed on `line`."""
        if bracket not in OPENING_BRACKETS:
            raise ValueError(f"Not an opening bracket: {bracket!r}")
        self.openers.append(bracket)
        self.lines.append(line)

    def pop(self, closer: str) -> int:
        """
        Removes the innermost entry, which `closer` must close.

        Args:
            closer (str): The closing bracket just consumed.

        Returns:
            int: The line the matching opener was recorded on.

        Raises:
            IndexError: If nothing is open.
            ValueError: If `closer` does not close the innermost opener.
        """
        if not self.openers:
            raise IndexError(f"No open bracket for {closer!r}")
        if OPENING_BRACKETS[self.openers[-1]] != closer:
            raise ValueError(
                f"{closer!r} does not close {self.openers[-1]!r} "
                f"opened at line {self.lines[-1]}"
            )
        self.openers.pop()
        return self.lines.pop()

    def top(self) -> tuple[str, int] | None:
        """Returns the innermost (bracket, line) pair, or None if empty."""
        if not self.openers:
            return None
        return self.openers[-1], self.lines[-1]

    def check_balanced(self) -> None:
        """Raises MismatchedBracketError for the innermost open bracket, if any."""
        top = self.top()
        if top is not None:
            raise MismatchedBracketError(*top)


__all__ = ["BracketTracker"]
