"""
pairsort - Interactive Pairwise Sorting

Ranks a fixed list of items from binary "which do you prefer" answers,
skipping every question the answers so far already imply.
"""

from .comparator import Comparator
from .exceptions import ConfigurationError, InvalidIndexError, ValidationError
from .graph import combinations, transitive_closure
from .interfaces import Chooser, ElementFetcher
from .models import Decision, DecisionKind, Element, ElementView, RankingOrder, Verdict
from .session import RunConfig, SessionRunner, SessionSummary

__version__ = "0.1.0"
__all__ = [
    "Comparator",
    "combinations",
    "transitive_closure",
    "Decision",
    "DecisionKind",
    "Element",
    "ElementView",
    "RankingOrder",
    "Verdict",
    "Chooser",
    "ElementFetcher",
    "RunConfig",
    "SessionRunner",
    "SessionSummary",
    "ConfigurationError",
    "InvalidIndexError",
    "ValidationError",
]
