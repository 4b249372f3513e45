"""Domain Services - Rules that span entities."""

from .transition_engine import TRANSITION_TABLE, TransitionEngine, TransitionResult

__all__ = ["TRANSITION_TABLE", "TransitionEngine", "TransitionResult"]
