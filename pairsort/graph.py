"""
Graph helpers for the comparator.

Pair enumeration and reachability over a boolean dominance matrix.
"""

from collections.abc import Sequence
from typing import TypeVar

import numpy as np
import numpy.typing as npt

T = TypeVar("T")


def combinations(elements: Sequence[T], n: int = 2) -> list[tuple[T, ...]]:
    """
    Return every combination of ``n`` elements, without replacement.

    Each element is taken in turn as the head and combined with the
    combinations of the elements after it, so earlier elements are never
    revisited and exactly C(len(elements), n) tuples come back.

    Args:
        elements: Elements to combine
        n: Number of elements per combination

    Returns:
        List of n-tuples in lexicographic index order
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    if n == 1:
        return [(element,) for element in elements]

    result = list[tuple[T, ...]]()
    for index, first in enumerate(elements):
        for partial in combinations(elements[index + 1:], n - 1):
            result.append((first, *partial))
    return result


def transitive_closure(edges: npt.NDArray[np.bool_]) -> npt.NDArray[np.bool_]:
    """
    Return the reachability matrix of a square boolean adjacency matrix.

    ``closure[i, j]`` is true iff a nonempty chain of edges leads from i to j.
    Runs the Floyd-Warshall relaxation with k as the outer loop; the input
    is not modified.
    """
    closure = np.array(edges, dtype=bool, copy=True)
    if closure.ndim != 2 or closure.shape[0] != closure.shape[1]:
        raise ValueError(f"edges must be a square matrix, got shape {closure.shape}")

    for k in range(closure.shape[0]):
        closure |= np.outer(closure[:, k], closure[k, :])

    return closure
