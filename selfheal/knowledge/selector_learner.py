"""
Selector Learner

Keeps a ledger of how often each selector located each logical element
and ranks selectors by success rate, so later runs try the reliable
ones first.

Ranking is a plain successes/attempts ratio with no recency weighting
and no minimum sample size: a selector at 1/1 outranks one at 950/1000.
Ties keep the order in which the selectors were first observed.

The ledger is loaded once and saved after every change. It assumes a
single writer per storage key.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from playwright.async_api import Error as PlaywrightError
from pydantic import ValidationError

from ..config import ResolverConfig
from ..core.strategies import CandidateStrategy, build_locator
from ..errors import StorageUnavailable
from .history_store import HistoryStore, JsonFileHistoryStore
from .models import SelectorHistory, SelectorStatRecord

# Configure logging
logger = logging.getLogger(__name__)


# Attributes worth turning into selectors, in the order they are emitted
INTERESTING_ATTRIBUTES = ("data-testid", "aria-label", "name", "type")

# Specific enough to stand alone; the rest are qualified with the tag name
STANDALONE_ATTRIBUTES = {"data-testid", "aria-label"}

MAX_TEXT_LENGTH = 50

_CSS_IDENT_RE = re.compile(r'^-?[A-Za-z_][\w-]*$')

# Snapshot of the element matched by the known selector
_ELEMENT_SNAPSHOT_JS = """
(el, attrs) => ({
    tag: el.tagName.toLowerCase(),
    id: el.id || "",
    classes: Array.from(el.classList),
    attributes: Object.fromEntries(
        attrs.filter(a => el.hasAttribute(a)).map(a => [a, el.getAttribute(a)])
    ),
    text: (el.textContent || "").trim()
})
"""


def synthesize_selectors(snapshot: Dict[str, Any]) -> List[str]:
    """
    Generate alternative selectors from an element snapshot.

    Args:
        snapshot: Dict with 'tag', 'id', 'classes', 'attributes' and 'text'

    Returns:
        Selector strings without duplicates, most specific first
    """
    tag = snapshot.get("tag") or "*"
    selectors = []

    element_id = snapshot.get("id") or ""
    if element_id and '"' not in element_id:
        if _CSS_IDENT_RE.match(element_id):
            selectors.append(f"#{element_id}")
        else:
            selectors.append(f'[id="{element_id}"]')

    classes = snapshot.get("classes") or []
    if classes and _CSS_IDENT_RE.match(classes[0]):
        selectors.append(f".{classes[0]}")

    attributes = snapshot.get("attributes") or {}
    for attr in INTERESTING_ATTRIBUTES:
        value = attributes.get(attr)
        if value is None or '"' in value:
            continue
        if attr in STANDALONE_ATTRIBUTES:
            selectors.append(f'[{attr}="{value}"]')
        else:
            selectors.append(f'{tag}[{attr}="{value}"]')

    text = (snapshot.get("text") or "").strip()
    if text and len(text) <= MAX_TEXT_LENGTH and '"' not in text and "\n" not in text:
        selectors.append(f'//{tag}[contains(text(), "{text}")]')

    return list(dict.fromkeys(selectors))


class SelectorLearner:
    """
    Ledger of selector reliability per logical element.

    Construct one per process and hand it to whatever needs it; the
    storage backend is injected so tests can use an in-memory store.
    """

    DEFAULT_RANKED_COUNT = 3

    def __init__(
        self,
        store: HistoryStore,
        history_key: str = "selector_history",
        ranked_count: int = DEFAULT_RANKED_COUNT
    ):
        """
        Initialize the learner. Call load_history() before use.

        Args:
            store: Backend the ledger is loaded from and saved to
            history_key: Storage key of the ledger
            ranked_count: Default size of get_ranked_selectors() results
        """
        self.store = store
        self.history_key = history_key
        self.ranked_count = ranked_count

        # element -> records in first-observed order
        self._history: Dict[str, List[SelectorStatRecord]] = {}
        # element -> records by success rate, descending
        self._rankings: Dict[str, List[SelectorStatRecord]] = {}

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "SelectorLearner":
        """Learner backed by JSON files in the configured history directory"""
        return cls(JsonFileHistoryStore(config.history_dir), config.history_key, config.ranked_count)

    # ==================== Persistence ====================

    def load_history(self):
        """
        Load the ledger from storage.

        Unavailable storage or an unreadable payload leaves the ledger
        empty; it is treated as "no history yet".
        """
        self._history = {}

        try:
            payload = self.store.load(self.history_key)
        except StorageUnavailable as e:
            logger.warning(f"{e}; starting with empty selector history")
            payload = None

        if payload is None:
            logger.info(f"No selector history found for '{self.history_key}', starting fresh")
        else:
            try:
                history = SelectorHistory.model_validate_json(payload)
            except ValidationError as e:
                logger.warning(f"Ignoring unreadable selector history '{self.history_key}': {e}")
            else:
                for element, records in history.elements.items():
                    unique: Dict[str, SelectorStatRecord] = {}
                    for record in records:
                        unique.setdefault(record.selector, record)
                    if unique:
                        self._history[element] = list(unique.values())

        self._update_rankings()

        total = sum(len(records) for records in self._history.values())
        logger.info(f"Selector history loaded: {len(self._history)} elements, {total} selectors")

    def save_history(self):
        """Persist the ledger. A storage failure is logged, never raised."""
        payload = SelectorHistory(elements=self._history).model_dump_json(indent=2)
        try:
            self.store.save(self.history_key, payload)
        except StorageUnavailable as e:
            logger.error(f"{e}; selector learning from this run will not be kept")

    # ==================== Ranking ====================

    def _update_rankings(self, element: Optional[str] = None):
        """Re-sort records by success rate. sorted() is stable, so ties keep first-observed order."""
        elements = [element] if element is not None else list(self._history)
        for name in elements:
            self._rankings[name] = sorted(
                self._history.get(name, []),
                key=lambda record: record.success_rate,
                reverse=True
            )

    def get_best_selector(self, element: str) -> Optional[str]:
        """
        Get the selector with the highest success rate.

        Returns:
            The selector, or None if the element has no history yet
        """
        ranking = self._rankings.get(element)
        if not ranking:
            logger.warning(f"No selector history found for element: {element}")
            return None
        return ranking[0].selector

    def get_ranked_selectors(self, element: str, count: Optional[int] = None) -> List[str]:
        """
        Get up to `count` selectors in order of historical reliability.

        Args:
            element: Logical element name
            count: Maximum number of selectors to return, defaults to ranked_count

        Returns:
            Selectors sorted by success rate, descending
        """
        ranking = self._rankings.get(element)
        if not ranking:
            logger.warning(f"No selector history found for element: {element}")
            return []
        if count is None:
            count = self.ranked_count
        return [record.selector for record in ranking[:max(count, 0)]]

    def propose_order(
        self,
        element: str,
        defaults: Sequence[CandidateStrategy]
    ) -> List[CandidateStrategy]:
        """
        Reorder candidates using the ledger.

        Order: selectors that have worked before (best rate first), then
        defaults with no history (registry order), then selectors that
        have never worked. Learned selectors missing from the defaults
        are parsed into candidates.
        """
        ranking = self._rankings.get(element, [])
        known = {record.selector for record in ranking}
        by_selector = {candidate.selector: candidate for candidate in defaults}

        def as_candidate(record: SelectorStatRecord) -> CandidateStrategy:
            return by_selector.get(record.selector) or CandidateStrategy.from_selector(record.selector)

        ordered = [as_candidate(r) for r in ranking if r.success_rate > 0]
        ordered.extend(c for c in defaults if c.selector not in known)
        ordered.extend(as_candidate(r) for r in ranking if r.success_rate == 0)

        return list(dict.fromkeys(ordered))

    # ==================== Reporting ====================

    def report_result(self, element: str, selector: str, success: bool):
        """
        Record the outcome of using a selector.

        Args:
            element: Logical element name
            selector: The selector that was used
            success: Whether it located the element
        """
        records = self._history.setdefault(element, [])
        record = next((r for r in records if r.selector == selector), None)

        if record is None:
            record = SelectorStatRecord(selector=selector)
            records.append(record)

        record.record(success)
        self._update_rankings(element)

        logger.debug(
            f"{element}: '{selector}' {'succeeded' if success else 'failed'} "
            f"({record.successes}/{record.attempts})"
        )

        self.save_history()

    async def learn_new_selectors(self, page, element: str, known_selector: str) -> List[str]:
        """
        Learn alternative selectors from a live element.

        Each new selector is seeded with one attempt and one success,
        since the element it came from was just found. Selectors already
        in the ledger are left untouched.

        Args:
            page: Playwright page
            element: Logical element name
            known_selector: A ledger selector known to locate the element,
                in any form CandidateStrategy.from_selector() accepts

        Returns:
            The selectors that were added
        """
        locator = build_locator(page, CandidateStrategy.from_selector(known_selector))

        try:
            if await locator.count() == 0:
                logger.warning(f"Known selector '{known_selector}' matched nothing; nothing learned for {element}")
                return []
            snapshot = await locator.first.evaluate(_ELEMENT_SNAPSHOT_JS, list(INTERESTING_ATTRIBUTES))
        except PlaywrightError as e:
            logger.error(f"Error learning new selectors for {element}: {e}")
            return []

        records = self._history.get(element, [])
        existing = {record.selector for record in records}
        added = []

        for selector in synthesize_selectors(snapshot):
            if selector in existing:
                continue
            records.append(SelectorStatRecord(selector=selector, attempts=1, successes=1))
            existing.add(selector)
            added.append(selector)

        if added:
            self._history[element] = records
            self._update_rankings(element)
            self.save_history()

        logger.info(f"Learned {len(added)} new selectors for {element}")
        return added

    # ==================== Inspection ====================

    def get_record(self, element: str, selector: str) -> Optional[SelectorStatRecord]:
        return next((r for r in self._history.get(element, []) if r.selector == selector), None)

    def success_rate(self, element: str, selector: str) -> float:
        record = self.get_record(element, selector)
        return record.success_rate if record else 0.0

    def records(self, element: str) -> List[SelectorStatRecord]:
        """Records for an element in first-observed order"""
        return list(self._history.get(element, []))

    def elements(self) -> List[str]:
        return list(self._history)

    def summary(self) -> Dict[str, int]:
        """Number of tracked selectors per element"""
        return {element: len(records) for element, records in self._history.items()}
