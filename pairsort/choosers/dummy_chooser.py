"""
Dummy chooser implementation for testing.

Always picks the same side, or picks a side at random.
"""

import random

from typing_extensions import override

from ..comparator import Comparator
from ..exceptions import ValidationError
from ..interfaces import Chooser
from ..models import ElementView, Verdict

MODES = ("left", "right", "random")


class DummyChooser(Chooser):
    """
    Dummy chooser for testing purposes.

    ``left`` and ``right`` always prefer that side; ``random`` flips a
    seeded coin.
    """

    def __init__(self, mode: str = "left", seed: int = 42):
        """
        Initialize dummy chooser.

        Args:
            mode: "left", "right" or "random"
            seed: Random seed for reproducible results
        """
        if mode not in MODES:
            raise ValidationError(f"Unknown mode: {mode}")

        self.mode = mode
        self.seed = seed
        self._rng = random.Random(seed)

    @override
    def choose(
        self, left: ElementView, right: ElementView, comparator: Comparator
    ) -> Verdict:
        if self.mode == "left":
            return Verdict.LEFT
        if self.mode == "right":
            return Verdict.RIGHT
        return self._rng.choice((Verdict.LEFT, Verdict.RIGHT))
