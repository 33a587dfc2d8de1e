"""
Runtime configuration for the resolver and the selector ledger.

Values come from dataclass defaults, optionally overridden by
SELFHEAL_* environment variables (a .env file is honoured).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class ResolverConfig:
    """Configuration for self-healing resolution"""
    attempt_timeout_ms: int = 5000
    # Upper bound for a single strategy attempt
    attempt_cap_ms: int = 2000
    exists_timeout_ms: int = 1000
    history_dir: str = "data/selector_history"
    history_key: str = "selector_history"
    ranked_count: int = 3
    log_level: str = "INFO"

    def effective_attempt_timeout(self, timeout_ms: int) -> int:
        """Per-attempt wait: the requested timeout, capped at attempt_cap_ms"""
        return min(timeout_ms, self.attempt_cap_ms)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ResolverConfig":
        """
        Build a config from the environment.

        Args:
            env_file: Optional path to a .env file. Defaults to python-dotenv's lookup.

        Returns:
            ResolverConfig with any SELFHEAL_* overrides applied
        """
        load_dotenv(env_file)
        defaults = cls()
        return cls(
            attempt_timeout_ms=int(os.getenv("SELFHEAL_ATTEMPT_TIMEOUT_MS", defaults.attempt_timeout_ms)),
            attempt_cap_ms=int(os.getenv("SELFHEAL_ATTEMPT_CAP_MS", defaults.attempt_cap_ms)),
            exists_timeout_ms=int(os.getenv("SELFHEAL_EXISTS_TIMEOUT_MS", defaults.exists_timeout_ms)),
            history_dir=os.getenv("SELFHEAL_HISTORY_DIR", defaults.history_dir),
            history_key=os.getenv("SELFHEAL_HISTORY_KEY", defaults.history_key),
            ranked_count=int(os.getenv("SELFHEAL_RANKED_COUNT", defaults.ranked_count)),
            log_level=os.getenv("SELFHEAL_LOG_LEVEL", defaults.log_level).upper(),
        )


def configure_logging(level: str = "INFO"):
    """Set up root logging for scripts. The library itself never calls this."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
