"""
HTTP access to the selector ledger.
"""

from .learner_api import router, create_app, get_learner

__all__ = ["router", "create_app", "get_learner"]
