"""
Comparator engine.

Derives an order over a fixed list of elements from binary "which do you
prefer" decisions. Every derived view is recomputed from the dominance
matrix on read; nothing is cached between calls.
"""

import random
from collections.abc import Sequence
from typing import Generic, TypeVar

import numpy as np
import numpy.typing as npt

from .exceptions import InvalidIndexError, ValidationError
from .graph import combinations, transitive_closure
from .logging_config import get_logger
from .models import Decision, DecisionKind, ElementView, RankingOrder

T = TypeVar("T")

# Module-level logger
logger = get_logger("comparator")


class Comparator(Generic[T]):
    """
    Pairwise comparison engine for a single sorting session.

    Elements are addressed by their index in the sequence given at
    construction. ``edges[i, j]`` records that i dominates j (i was
    preferred over j). Contradictory decisions are accepted; they show up
    in :attr:`inconsistent` and make the ranking best-effort.
    """

    def __init__(
        self,
        elements: Sequence[T],
        order: RankingOrder = RankingOrder.ASCENDING,
        rng: random.Random | None = None,
    ):
        """
        Initialize a comparator.

        Args:
            elements: Items to sort; their order fixes their indices
            order: Direction in which :attr:`result` is listed
            rng: Random source for the initial pair shuffle
        """
        if isinstance(elements, (str, bytes)) or not isinstance(elements, Sequence):
            raise ValidationError(
                f"elements must be a sequence, got {type(elements).__name__}"
            )

        self._elements: tuple[T, ...] = tuple(elements)
        self.order: RankingOrder = order

        size = len(self._elements)
        pairs = [
            (int(left), int(right)) for left, right in combinations(range(size))
        ]
        (rng or random.Random()).shuffle(pairs)
        self._pairs: tuple[tuple[int, int], ...] = tuple(pairs)

        self._edges: npt.NDArray[np.bool_] = np.zeros((size, size), dtype=bool)
        self._skips: npt.NDArray[np.float64] = np.ones((size, size), dtype=float)
        self._history = list[Decision]()

        logger.debug(f"Comparator created: {size} elements, {len(self._pairs)} pairs")

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return (
            f"Comparator(elements={len(self)}, pending={len(self.pending)}, "
            f"history={len(self._history)})"
        )

    # Read-only state

    @property
    def elements(self) -> tuple[T, ...]:
        return self._elements

    @property
    def pairs(self) -> tuple[tuple[int, int], ...]:
        """All unordered index pairs, in their shuffled presentation order."""
        return self._pairs

    @property
    def edges(self) -> npt.NDArray[np.bool_]:
        """Copy of the direct dominance matrix."""
        return self._edges.copy()

    @property
    def skips(self) -> npt.NDArray[np.float64]:
        """Copy of the per-pair skip multipliers."""
        return self._skips.copy()

    @property
    def history(self) -> tuple[Decision, ...]:
        return tuple(self._history)

    # Derived views

    @property
    def closure(self) -> npt.NDArray[np.bool_]:
        """Transitive closure of the current edges."""
        return transitive_closure(self._edges)

    def degree(self, index: int) -> int:
        """Number of elements ``index`` is known to dominate, directly or transitively."""
        index = self._check_index(index)
        return int(self.closure[index].sum())

    @property
    def degrees(self) -> list[int]:
        """Degree of every element, computed from a single closure."""
        return [int(count) for count in self.closure.sum(axis=1)]

    @property
    def pending(self) -> list[tuple[int, int]]:
        """
        Pairs whose relative order the closure does not determine yet.

        Sorted ascending by ``(degree(left)+1) * (degree(right)+1) * skip``;
        the sort is stable so equal priorities keep the shuffled order.
        """
        closure = self.closure
        degrees = closure.sum(axis=1)

        pending = [
            (left, right)
            for left, right in self._pairs
            if not (closure[left, right] or closure[right, left])
        ]

        return sorted(
            pending,
            key=lambda pair: (
                (int(degrees[pair[0]]) + 1)
                * (int(degrees[pair[1]]) + 1)
                * float(self._skips[pair[0], pair[1]])
            ),
        )

    @property
    def current(self) -> tuple[int, int] | None:
        """The pair to ask about next, or None once sorted."""
        pending = self.pending
        return pending[0] if pending else None

    @property
    def is_sorted(self) -> bool:
        return self.current is None

    @property
    def left(self) -> ElementView | None:
        current = self.current
        if current is None:
            return None
        return ElementView(index=current[0], element=self._elements[current[0]])

    @property
    def right(self) -> ElementView | None:
        current = self.current
        if current is None:
            return None
        return ElementView(index=current[1], element=self._elements[current[1]])

    @property
    def ranking(self) -> list[tuple[T, int]]:
        """Elements paired with their degree, in :attr:`order` direction."""
        degrees = self.degrees
        if self.order is RankingOrder.DESCENDING:
            indices = sorted(range(len(self)), key=lambda i: -degrees[i])
        else:
            indices = sorted(range(len(self)), key=lambda i: degrees[i])
        return [(self._elements[i], degrees[i]) for i in indices]

    @property
    def result(self) -> list[T]:
        """
        Elements sorted by degree.

        Defined at any time; it is the final ranking once :attr:`is_sorted`.
        """
        return [element for element, _ in self.ranking]

    @property
    def inconsistent(self) -> list[int]:
        """
        Indices that lie on a cycle containing a one-way decision.

        Ties put two elements on a cycle on purpose; only cycles that also
        run through a strict preference count as contradictions.
        """
        closure = self.closure
        edges = self._edges
        flagged = set[int]()

        strict = np.argwhere(edges & ~edges.T)
        for winner, loser in strict:
            if not closure[loser, winner]:
                continue
            on_cycle = closure[loser, :] & closure[:, winner]
            flagged.update(int(i) for i in np.flatnonzero(on_cycle))
            flagged.update((int(winner), int(loser)))

        return sorted(flagged)

    # Mutations

    def choose(self, winner: int, loser: int) -> None:
        """Record that ``winner`` is preferred over ``loser``."""
        winner, loser = self._check_pair(winner, loser)
        if self.current is None:
            logger.debug(f"Ignoring {winner} > {loser}: already sorted")
            return

        if not self._edges[winner, loser] and self.closure[loser, winner]:
            logger.warning(
                f"Decision {winner} > {loser} contradicts earlier decisions "
                f"({loser} already dominates {winner})"
            )

        self._record(winner, loser, DecisionKind.CHOICE)
        self._edges[winner, loser] = True
        logger.debug(f"Chose {winner} over {loser}")

    def choose_both(self, a: int, b: int) -> None:
        """Record a tie: ``a`` and ``b`` dominate each other."""
        a, b = self._check_pair(a, b)
        if self.current is None:
            logger.debug(f"Ignoring tie between {a} and {b}: already sorted")
            return

        self._record(a, b, DecisionKind.TIE)
        self._edges[a, b] = True
        self._edges[b, a] = True
        logger.debug(f"Tied {a} and {b}")

    def postpone(self) -> None:
        """Push the current pair further back in the queue."""
        current = self.current
        if current is None:
            logger.debug("Nothing to postpone: already sorted")
            return

        left, right = current
        self._skips[left, right] *= 2
        logger.debug(
            f"Postponed ({left}, {right}), skip weight now {self._skips[left, right]:g}"
        )

    def undo(self) -> None:
        """Retract the most recent recorded decision."""
        if not self._history:
            logger.debug("Nothing to undo: history is empty")
            return

        decision = self._history.pop()
        self._edges[decision.left, decision.right] = False
        self._edges[decision.right, decision.left] = False
        logger.debug(
            f"Undid {decision.kind.value} between {decision.left} and {decision.right}"
        )

    # Internals

    def _record(self, left: int, right: int, kind: DecisionKind) -> None:
        """Append to history unless the pair is already recorded in either order."""
        if any(decision.involves(left, right) for decision in self._history):
            return
        self._history.append(Decision(left=left, right=right, kind=kind))

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise InvalidIndexError(index, len(self))
        if not 0 <= index < len(self):
            raise InvalidIndexError(index, len(self))
        return int(index)

    def _check_pair(self, a: int, b: int) -> tuple[int, int]:
        a, b = self._check_index(a), self._check_index(b)
        if a == b:
            raise InvalidIndexError(
                b, len(self), f"Cannot compare element {b} with itself"
            )
        return a, b
