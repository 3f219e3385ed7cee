"""
Simulated chooser implementation.

Answers from latent scores with a noise parameter, for testing and demos.
"""

import random
from typing import Any

from typing_extensions import override

from ..comparator import Comparator
from ..interfaces import Chooser
from ..logging_config import get_logger
from ..models import ElementView, Verdict


class SimulatedChooser(Chooser):
    """
    Simulated chooser for testing purposes.

    Prefers the element with the higher ground truth score after adding
    Gaussian noise. Scores within ``tie_margin`` of each other are a tie.
    Elements are looked up by ``str(element)``.
    """

    def __init__(
        self,
        ground_truth: dict[str, float],
        noise: float = 0.1,
        tie_margin: float = 0.0,
        seed: int | None = None,
    ):
        """
        Initialize simulated chooser.

        Args:
            ground_truth: Dict mapping element label to true preference score
            noise: Amount of noise to add (0-1, where 1 = full noise)
            tie_margin: Largest score difference still answered as a tie
            seed: Random seed for reproducible noise
        """
        self.ground_truth = ground_truth
        self.noise = max(0.0, min(1.0, noise))  # Clamp to [0, 1]
        self.tie_margin = max(0.0, tie_margin)
        self._rng = random.Random(seed)
        self.logger = get_logger("sim_chooser")

    def _add_noise(self, score: float) -> float:
        """Add Gaussian noise to score."""
        if self.noise == 0:
            return score

        # Scale noise by score magnitude
        noise_scale = abs(score) * self.noise
        return score + self._rng.gauss(0, noise_scale)

    def _score(self, element: Any) -> float:
        return self.ground_truth.get(str(element), 0.0)

    @override
    def choose(
        self, left: ElementView, right: ElementView, comparator: Comparator
    ) -> Verdict:
        left_score = self._add_noise(self._score(left.element))
        right_score = self._add_noise(self._score(right.element))

        self.logger.debug(
            f"{left.element}: {left_score:.3f} vs {right.element}: {right_score:.3f}"
        )

        if abs(left_score - right_score) <= self.tie_margin:
            return Verdict.TIE
        return Verdict.LEFT if left_score > right_score else Verdict.RIGHT

    def set_noise(self, noise: float) -> None:
        """Update noise level."""
        self.noise = max(0.0, min(1.0, noise))
