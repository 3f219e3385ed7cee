"""
Abstract base classes for the collaborators around the comparator.

The comparator itself is a concrete class; these interfaces describe the
outer layer that supplies its elements and answers its questions. All
interfaces are synchronous.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .models import Element, ElementView, Verdict

if TYPE_CHECKING:
    from .comparator import Comparator


class ElementFetcher(ABC):
    """Interface for loading the fixed list of elements to sort."""

    @abstractmethod
    def list_elements(self) -> Sequence[Element]:
        """Return all elements, in file order."""
        pass


class Chooser(ABC):
    """Interface for answering "which do you prefer" questions."""

    @abstractmethod
    def choose(
        self, left: ElementView, right: ElementView, comparator: "Comparator"
    ) -> Verdict:
        """
        Answer the question for the pair currently on display.

        Args:
            left: Left side of the current pair
            right: Right side of the current pair
            comparator: The comparator asking, for read-only progress views

        Returns:
            Verdict to apply to the current pair
        """
        pass
