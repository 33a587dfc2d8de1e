from pydantic import BaseModel, Field, model_validator
from typing import Dict, List
from datetime import datetime, timezone


HISTORY_FORMAT_VERSION = 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SelectorStatRecord(BaseModel):
    """Attempt/success counts for one selector of one logical element"""
    selector: str
    attempts: int = Field(default=0, ge=0)
    successes: int = Field(default=0, ge=0)
    last_updated: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _successes_within_attempts(self):
        if self.successes > self.attempts:
            raise ValueError(
                f"successes ({self.successes}) exceeds attempts ({self.attempts}) for '{self.selector}'"
            )
        return self

    @property
    def success_rate(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.successes / self.attempts

    def record(self, success: bool):
        """Count one attempt"""
        self.attempts += 1
        if success:
            self.successes += 1
        self.last_updated = utc_now()


class SelectorHistory(BaseModel):
    """Serialized form of the selector ledger. Record lists keep first-observed order."""
    version: int = HISTORY_FORMAT_VERSION
    elements: Dict[str, List[SelectorStatRecord]] = Field(default_factory=dict)
