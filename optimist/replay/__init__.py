"""
Replay: fold a sequence of actions through the reconciler.
"""

from .runner import ReplayResult, fold, replay
from .source import read_actions

__all__ = [
    "ReplayResult",
    "fold",
    "replay",
    "read_actions",
]
