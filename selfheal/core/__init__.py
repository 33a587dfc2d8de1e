"""
Core Resolution Module

Locator strategies and the self-healing resolver that tries them in
order until one locates the element.
"""

from .strategies import CandidateStrategy, StrategyKind, build_locator
from .self_healing import SelfHealingResolver, ResolutionExhausted, AttemptOutcome

__all__ = [
    "CandidateStrategy",
    "StrategyKind",
    "build_locator",
    "SelfHealingResolver",
    "ResolutionExhausted",
    "AttemptOutcome"
]
