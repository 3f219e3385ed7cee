"""
Tests for the Comparator engine.

Focus on pending-pair bookkeeping, decisions, undo and ranking direction.
"""

import random
from math import comb

import numpy as np
import pytest

from pairsort.comparator import Comparator
from pairsort.exceptions import InvalidIndexError, ValidationError
from pairsort.graph import combinations
from pairsort.models import DecisionKind, ElementView, RankingOrder


def make_comparator(elements, order: RankingOrder = RankingOrder.ASCENDING, seed: int = 0) -> Comparator:
    return Comparator(elements, order=order, rng=random.Random(seed))


class TestConstruction:
    """Initial state of a freshly built comparator."""

    @pytest.mark.parametrize("size", [0, 1, 2, 3, 6])
    def test_initial_pending_covers_all_pairs(self, size: int) -> None:
        """Initial pending set should hold C(n, 2) pairs; sorted iff n < 2."""
        comparator = make_comparator(list(range(size)))

        assert len(comparator.pending) == comb(size, 2)
        assert comparator.is_sorted == (size < 2)

    def test_pairs_are_a_permutation_of_all_combinations(self) -> None:
        comparator = make_comparator(list("abcdef"))

        assert sorted(comparator.pairs) == combinations(range(6))

    def test_shuffle_is_reproducible_with_same_seed(self) -> None:
        first = make_comparator(list(range(8)), seed=7)
        second = make_comparator(list(range(8)), seed=7)

        assert first.pairs == second.pairs

    def test_single_element_is_sorted(self) -> None:
        comparator = make_comparator(["only"])

        assert comparator.current is None
        assert comparator.left is None and comparator.right is None
        assert comparator.result == ["only"]

    def test_rejects_non_sequence(self) -> None:
        with pytest.raises(ValidationError):
            Comparator(iter([1, 2, 3]))

    def test_rejects_string(self) -> None:
        with pytest.raises(ValidationError):
            Comparator("abc")

    def test_fresh_matrices(self) -> None:
        comparator = make_comparator(["a", "b", "c"])

        assert not comparator.edges.any()
        assert (comparator.skips == 1).all()
        assert comparator.history == ()


class TestViews:
    """Derived views exposed to a front end."""

    def test_left_and_right_describe_current_pair(self) -> None:
        comparator = make_comparator(["a", "b", "c"])
        left, right = comparator.current

        assert comparator.left == ElementView(index=left, element="abc"[left])
        assert comparator.right == ElementView(index=right, element="abc"[right])

    def test_current_is_first_pending(self) -> None:
        comparator = make_comparator(list(range(5)))
        comparator.choose(0, 1)

        assert comparator.current == comparator.pending[0]

    def test_edges_is_a_copy(self) -> None:
        comparator = make_comparator(["a", "b"])

        edges = comparator.edges
        edges[0, 1] = True

        assert not comparator.edges.any()

    def test_low_degree_pairs_come_first(self) -> None:
        """Pairs between elements with no known relations outrank the rest."""
        comparator = make_comparator(list(range(4)))
        comparator.choose(0, 1)

        # degree(0) is 1, so every pair touching 0 has priority 2; the others 1
        assert 0 not in comparator.current
        priorities = [
            (comparator.degree(left) + 1) * (comparator.degree(right) + 1)
            for left, right in comparator.pending
        ]
        assert priorities == sorted(priorities)

    def test_degree_counts_transitive_dominance(self) -> None:
        comparator = make_comparator(list(range(4)))
        comparator.choose(0, 1)
        comparator.choose(1, 2)

        assert comparator.degree(0) == 2
        assert comparator.degree(1) == 1
        assert comparator.degree(2) == 0
        assert comparator.degrees == [2, 1, 0, 0]


class TestDecisions:
    """choose, choose_both, postpone and undo."""

    def test_choose_is_idempotent(self) -> None:
        once = make_comparator(["a", "b", "c"])
        twice = make_comparator(["a", "b", "c"])

        once.choose(0, 2)
        twice.choose(0, 2)
        twice.choose(0, 2)

        assert np.array_equal(once.edges, twice.edges)
        assert len(twice.history) == 1

    def test_choose_then_undo_round_trip(self) -> None:
        comparator = make_comparator(list(range(5)))
        comparator.choose(3, 4)
        before_pending = comparator.pending
        before_sorted = comparator.is_sorted
        before_edges = comparator.edges
        left, right = comparator.current

        comparator.choose(left, right)
        comparator.undo()

        assert comparator.pending == before_pending
        assert comparator.is_sorted == before_sorted
        assert np.array_equal(comparator.edges, before_edges)

    def test_transitivity_resolves_implied_pair(self) -> None:
        comparator = make_comparator(["a", "b", "c"])

        comparator.choose(0, 1)
        comparator.choose(1, 2)

        assert (0, 2) not in comparator.pending
        assert comparator.is_sorted

    def test_pending_never_grows_without_undo(self) -> None:
        comparator = make_comparator(list(range(7)), seed=3)
        rng = random.Random(11)
        sizes = [len(comparator.pending)]

        while not comparator.is_sorted:
            left, right = comparator.current
            move = rng.choice(("left", "right", "tie"))
            if move == "left":
                comparator.choose(left, right)
            elif move == "right":
                comparator.choose(right, left)
            else:
                comparator.choose_both(left, right)
            sizes.append(len(comparator.pending))

        assert sizes == sorted(sizes, reverse=True)
        assert sizes[-1] == 0

    def test_history_dedup_is_direction_insensitive(self) -> None:
        comparator = make_comparator(["a", "b", "c"])

        comparator.choose(0, 1)
        comparator.choose(1, 0)

        assert len(comparator.history) == 1
        assert comparator.edges[0, 1] and comparator.edges[1, 0]

    def test_undo_clears_both_directions(self) -> None:
        comparator = make_comparator(["a", "b", "c"])
        comparator.choose(0, 1)
        comparator.choose(1, 0)

        comparator.undo()

        assert not comparator.edges.any()
        assert comparator.history == ()

    def test_undo_reopens_a_sorted_session(self) -> None:
        comparator = make_comparator(["a", "b"])
        comparator.choose(1, 0)
        assert comparator.is_sorted

        comparator.undo()

        assert not comparator.is_sorted
        assert comparator.current == (0, 1)

    def test_undo_reopens_transitively_resolved_pair(self) -> None:
        comparator = make_comparator(["a", "b", "c"])
        comparator.choose(0, 1)
        comparator.choose(1, 2)

        comparator.undo()

        assert (0, 2) in comparator.pending
        assert (1, 2) in comparator.pending

    def test_choose_after_sorted_is_noop(self) -> None:
        comparator = make_comparator(["A", "B", "C"])
        comparator.choose(0, 1)
        comparator.choose(1, 2)
        assert comparator.is_sorted
        edges = comparator.edges
        result = comparator.result

        comparator.choose(2, 0)

        assert np.array_equal(comparator.edges, edges)
        assert len(comparator.history) == 2
        assert comparator.is_sorted
        assert comparator.result == result

    def test_undo_on_fresh_comparator_changes_nothing(self) -> None:
        comparator = make_comparator(["A", "B", "C"])
        pending = comparator.pending
        result = comparator.result

        comparator.undo()

        assert comparator.pending == pending
        assert comparator.current == pending[0]
        assert comparator.result == result
        assert not comparator.is_sorted
        assert comparator.history == ()
        assert not comparator.edges.any()


class TestTie:
    """choose_both keeps a single history entry that undo reverses fully."""

    def test_tie_records_one_entry_and_both_edges(self) -> None:
        comparator = make_comparator(["a", "b", "c"])

        comparator.choose_both(0, 1)

        assert len(comparator.history) == 1
        assert comparator.history[0].kind is DecisionKind.TIE
        assert comparator.edges[0, 1] and comparator.edges[1, 0]

    def test_single_undo_reverses_a_tie(self) -> None:
        comparator = make_comparator(["a", "b", "c"])
        before = comparator.pending

        comparator.choose_both(0, 1)
        comparator.undo()

        assert not comparator.edges.any()
        assert comparator.pending == before

    def test_tie_resolves_the_pair(self) -> None:
        comparator = make_comparator(["a", "b"])

        comparator.choose_both(0, 1)

        assert comparator.is_sorted
        # Each side reaches the other and, through it, itself
        assert comparator.degrees == [2, 2]

    def test_tie_is_not_a_contradiction(self) -> None:
        comparator = make_comparator(["a", "b", "c"])

        comparator.choose_both(0, 1)
        comparator.choose(1, 2)

        assert comparator.inconsistent == []


    def test_tie_after_sorted_is_noop(self) -> None:
        comparator = make_comparator(["A", "B", "C"])
        comparator.choose(0, 1)
        comparator.choose(1, 2)
        edges = comparator.edges

        comparator.choose_both(0, 2)

        assert np.array_equal(comparator.edges, edges)
        assert len(comparator.history) == 2
        assert comparator.inconsistent == []


class TestPostpone:
    """postpone only changes ordering."""

    def test_membership_unchanged(self) -> None:
        comparator = make_comparator(list(range(5)))
        before = set(comparator.pending)

        comparator.postpone()

        assert set(comparator.pending) == before

    def test_doubles_skip_of_current_pair(self) -> None:
        comparator = make_comparator(list(range(4)))
        left, right = comparator.current

        comparator.postpone()

        skips = comparator.skips
        assert skips[left, right] == 2
        assert (skips == 1).sum() == 15, "Only the displayed pair is touched"

    def test_repeated_postpone_keeps_doubling(self) -> None:
        comparator = make_comparator(["a", "b"])

        comparator.postpone()
        comparator.postpone()
        comparator.postpone()

        assert comparator.skips[0, 1] == 8

    def test_postponed_pair_moves_behind_equal_pairs(self) -> None:
        comparator = make_comparator(list(range(4)))
        first = comparator.current

        comparator.postpone()

        assert comparator.current != first
        assert comparator.pending[-1] == first

    def test_only_pair_stays_current(self) -> None:
        comparator = make_comparator(["a", "b"])

        comparator.postpone()

        assert comparator.current == (0, 1)

    def test_postpone_when_sorted_is_noop(self) -> None:
        comparator = make_comparator(["a", "b"])
        comparator.choose(0, 1)

        comparator.postpone()

        assert (comparator.skips == 1).all()


class TestRanking:
    """Result direction: choosing an element means it ranks higher."""

    def _sort_abc(self, order: RankingOrder) -> Comparator:
        comparator = make_comparator(["A", "B", "C"], order=order)
        comparator.choose(0, 1)

        assert set(comparator.pending) == {(0, 2), (1, 2)}
        assert not comparator.is_sorted

        comparator.choose(0, 2)
        comparator.choose(1, 2)
        return comparator

    def test_ascending_lists_least_dominant_first(self) -> None:
        comparator = self._sort_abc(RankingOrder.ASCENDING)

        assert comparator.pending == []
        assert comparator.is_sorted
        assert comparator.result == ["C", "B", "A"]
        assert comparator.ranking == [("C", 0), ("B", 1), ("A", 2)]

    def test_descending_lists_preferred_first(self) -> None:
        comparator = self._sort_abc(RankingOrder.DESCENDING)

        assert comparator.is_sorted
        assert comparator.result == ["A", "B", "C"]

    def test_ascending_is_the_default(self) -> None:
        comparator = Comparator(["A", "B"])
        comparator.choose(0, 1)

        assert comparator.result == ["B", "A"]

    @pytest.mark.parametrize("order", list(RankingOrder))
    def test_equal_degrees_keep_input_order(self, order: RankingOrder) -> None:
        comparator = make_comparator(["x", "y", "z"], order=order)

        assert comparator.result == ["x", "y", "z"]


class TestContradictions:
    """Cyclic decisions are accepted and flagged."""

    def test_three_cycle_is_accepted_and_flagged(self) -> None:
        comparator = make_comparator(["a", "b", "c", "d"])

        comparator.choose(0, 1)
        comparator.choose(1, 2)
        comparator.choose(2, 0)

        assert comparator.inconsistent == [0, 1, 2]
        assert comparator.degrees[:3] == [3, 3, 3]
        assert len(comparator.history) == 3

    def test_undo_clears_the_contradiction(self) -> None:
        comparator = make_comparator(["a", "b", "c", "d"])
        comparator.choose(0, 1)
        comparator.choose(1, 2)
        comparator.choose(2, 0)

        comparator.undo()

        assert comparator.inconsistent == []
        assert (0, 2) not in comparator.pending


class TestIndexValidation:
    """Out-of-range indices are programmer errors."""

    @pytest.mark.parametrize("winner,loser", [(0, 3), (-1, 0), (3, 0), (1, 1)])
    def test_choose_rejects_bad_indices(self, winner: int, loser: int) -> None:
        comparator = make_comparator(["a", "b", "c"])

        with pytest.raises(InvalidIndexError):
            comparator.choose(winner, loser)

        assert not comparator.edges.any()
        assert comparator.history == ()

    def test_invalid_index_is_an_index_error(self) -> None:
        comparator = make_comparator(["a", "b"])

        with pytest.raises(IndexError):
            comparator.choose_both(0, 2)

    def test_rejects_non_integer_index(self) -> None:
        comparator = make_comparator(["a", "b"])

        with pytest.raises(InvalidIndexError):
            comparator.choose("0", 1)  # type: ignore[arg-type]
        with pytest.raises(InvalidIndexError):
            comparator.choose(True, 0)

    def test_self_comparison_has_its_own_message(self) -> None:
        comparator = make_comparator(["a", "b"])

        with pytest.raises(InvalidIndexError, match="with itself"):
            comparator.choose(1, 1)
        with pytest.raises(InvalidIndexError, match="out of range"):
            comparator.choose(0, 2)

    def test_degree_rejects_out_of_range(self) -> None:
        comparator = make_comparator(["a", "b"])

        with pytest.raises(InvalidIndexError):
            comparator.degree(2)

    def test_numpy_integers_are_accepted(self) -> None:
        comparator = make_comparator(["a", "b"])

        comparator.choose(np.int64(1), np.int64(0))

        assert comparator.history[0].left == 1
        assert type(comparator.history[0].left) is int
