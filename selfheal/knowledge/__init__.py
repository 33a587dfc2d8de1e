"""
Knowledge Module

Default element strategies and the selector ledger that learns which
ones work.
"""

from .element_registry import (
    SelectorRegistry,
    DEFAULT_REGISTRY,
    LOGIN_PAGE_ELEMENTS,
    DASHBOARD_ELEMENTS
)
from .history_store import HistoryStore, JsonFileHistoryStore, InMemoryHistoryStore
from .models import SelectorStatRecord, SelectorHistory
from .selector_learner import SelectorLearner, synthesize_selectors

__all__ = [
    "SelectorRegistry",
    "DEFAULT_REGISTRY",
    "LOGIN_PAGE_ELEMENTS",
    "DASHBOARD_ELEMENTS",
    "HistoryStore",
    "JsonFileHistoryStore",
    "InMemoryHistoryStore",
    "SelectorStatRecord",
    "SelectorHistory",
    "SelectorLearner",
    "synthesize_selectors"
]
