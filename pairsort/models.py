"""
Core dataclasses and enums for pairsort.

Defines the element, decision and verdict models shared by the comparator,
the fetchers and the choosers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import ValidationError


class DecisionKind(Enum):
    """How a history entry was produced."""

    CHOICE = "choice"
    TIE = "tie"


class RankingOrder(Enum):
    """Direction in which the comparator lists its result.

    A chosen element dominates the other one, so its degree grows.
    ASCENDING lists the least dominant element first, DESCENDING the
    most preferred element first.
    """

    ASCENDING = "ascending"
    DESCENDING = "descending"


class Verdict(Enum):
    """Answer a chooser gives for the pair currently on display."""

    LEFT = "left"
    RIGHT = "right"
    TIE = "tie"
    POSTPONE = "postpone"
    UNDO = "undo"
    QUIT = "quit"


@dataclass(frozen=True)
class ElementView:
    """One side of the current pair: the element and its index."""

    index: int
    element: Any


@dataclass(frozen=True)
class Decision:
    """A recorded decision between two element indices."""

    left: int
    right: int
    kind: DecisionKind = DecisionKind.CHOICE

    def __post_init__(self) -> None:
        """Validate decision data."""
        if self.left == self.right:
            raise ValidationError("a decision needs two distinct indices")

    def involves(self, a: int, b: int) -> bool:
        """Whether this decision concerns the pair {a, b}, in either order."""
        return {self.left, self.right} == {a, b}


@dataclass
class Element:
    """An item loaded from an elements file."""

    label: str
    payload: Any = None

    def __post_init__(self) -> None:
        """Validate element data."""
        if not self.label:
            raise ValidationError("label cannot be empty")

    def __str__(self) -> str:
        return self.label
