"""
Self-Healing Element Resolution

Locates UI elements through ordered fallback strategies and learns,
run over run, which strategies are most reliable:
- Registry of default strategies per logical element
- Resolver that tries strategies until one locates the element
- Learner that ranks selectors by observed success rate
"""

# core must be imported before knowledge (the resolver reads the registry)
from .core.strategies import CandidateStrategy, StrategyKind
from .core.self_healing import SelfHealingResolver, ResolutionExhausted, AttemptOutcome
from .knowledge.element_registry import SelectorRegistry, DEFAULT_REGISTRY
from .knowledge.history_store import HistoryStore, JsonFileHistoryStore, InMemoryHistoryStore
from .knowledge.models import SelectorStatRecord
from .knowledge.selector_learner import SelectorLearner
from .config import ResolverConfig, configure_logging
from .errors import SelfHealError, StorageUnavailable

__all__ = [
    # Core
    "CandidateStrategy",
    "StrategyKind",
    "SelfHealingResolver",
    "ResolutionExhausted",
    "AttemptOutcome",
    # Knowledge
    "SelectorRegistry",
    "DEFAULT_REGISTRY",
    "HistoryStore",
    "JsonFileHistoryStore",
    "InMemoryHistoryStore",
    "SelectorStatRecord",
    "SelectorLearner",
    # Config & errors
    "ResolverConfig",
    "configure_logging",
    "SelfHealError",
    "StorageUnavailable"
]

__version__ = "1.0.0"
