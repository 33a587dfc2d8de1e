"""
History Store - Durable storage for the selector ledger

The learner only needs two operations: load a serialized table by key
and save one back. Backends raise StorageUnavailable on I/O failure;
load() returns None when nothing was ever saved under the key.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..errors import StorageUnavailable

# Configure logging
logger = logging.getLogger(__name__)


class HistoryStore(ABC):
    """The abstract contract for selector history storage."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Load a serialized history table.

        Args:
            key: Storage key of the table

        Returns:
            The serialized table, or None if the key has never been saved
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, key: str, payload: str):
        """
        Persist a serialized history table, replacing any previous one.

        Args:
            key: Storage key of the table
            payload: Serialized table
        """
        raise NotImplementedError


class JsonFileHistoryStore(HistoryStore):
    """One JSON file per key under a data directory."""

    def __init__(self, data_dir: str = "data/selector_history"):
        self.data_dir = Path(data_dir)

    def _get_history_file(self, key: str) -> Path:
        """Get history file path"""
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        history_file = self._get_history_file(key)
        if not history_file.exists():
            return None

        try:
            return history_file.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageUnavailable(key, str(e)) from e

    def save(self, key: str, payload: str):
        history_file = self._get_history_file(key)
        temp_file = history_file.with_suffix(".json.tmp")

        try:
            history_file.parent.mkdir(parents=True, exist_ok=True)
            temp_file.write_text(payload, encoding="utf-8")
            temp_file.replace(history_file)
        except OSError as e:
            raise StorageUnavailable(key, str(e)) from e

        logger.debug(f"Saved selector history to {history_file}")


class InMemoryHistoryStore(HistoryStore):
    """Keeps payloads in a dict. For tests and throwaway runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.payloads: Dict[str, str] = dict(initial or {})
        self.save_count = 0

    def load(self, key: str) -> Optional[str]:
        return self.payloads.get(key)

    def save(self, key: str, payload: str):
        self.payloads[key] = payload
        self.save_count += 1
