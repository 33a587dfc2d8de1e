"""
Error types shared across the self-healing package.
"""


class SelfHealError(Exception):
    """Base class for all selfheal errors"""


class StorageUnavailable(SelfHealError):
    """Selector history storage could not be read or written"""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Selector history storage unavailable for '{key}': {reason}")
