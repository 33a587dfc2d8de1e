"""
Self-Healing Resolver

Locates elements by trying several locator strategies in priority
order and returning the first one that becomes visible. Cosmetic UI
changes (renamed ids, new classes) are absorbed as long as one of an
element's strategies still matches.

Resolution is first-match-wins: later strategies are never tried once
one succeeds, even if they would also match.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from playwright.async_api import Error as PlaywrightError

from ..config import ResolverConfig
from ..errors import SelfHealError
from ..knowledge.element_registry import DEFAULT_REGISTRY, SelectorRegistry
from .strategies import CandidateStrategy, StrategyKind, build_locator

# Configure logging
logger = logging.getLogger(__name__)


# A logical element name, or an explicit list of candidates
Target = Union[str, Sequence[CandidateStrategy]]


@dataclass
class AttemptOutcome:
    """Result of trying one candidate strategy"""
    kind: StrategyKind
    selector: str
    success: bool
    elapsed_ms: int
    error_message: Optional[str] = None


class ResolutionExhausted(SelfHealError):
    """Every candidate strategy failed to locate the element"""

    def __init__(self, attempts: List[AttemptOutcome], element: Optional[str] = None):
        self.attempts = attempts
        self.element = element
        kinds = ", ".join(kind.value for kind in self.attempted_kinds)
        subject = f"element '{element}'" if element else "element"
        super().__init__(f"Failed to find {subject} with any strategy: {kinds}")

    @property
    def attempted_kinds(self) -> List[StrategyKind]:
        return [attempt.kind for attempt in self.attempts]


class SelfHealingResolver:
    """
    Resolves logical elements on a Playwright page.

    Features:
    - Ordered fallback across locator strategies
    - Bounded wait per strategy
    - Optional learner: candidate order from the ledger, outcomes fed back
    - Attempt log for diagnosing flaky suites
    """

    def __init__(
        self,
        page=None,
        registry: Optional[SelectorRegistry] = None,
        learner=None,
        config: Optional[ResolverConfig] = None
    ):
        """
        Initialize the resolver.

        Args:
            page: Playwright page object
            registry: Default strategies per logical element
            learner: Optional SelectorLearner for ordering and reporting
            config: Timeouts; defaults to ResolverConfig()
        """
        self.page = page
        self.registry = registry or DEFAULT_REGISTRY
        self.learner = learner
        self.config = config or ResolverConfig()

        self.attempt_log: List[AttemptOutcome] = []

    def set_page(self, page):
        """Set the Playwright page object"""
        self.page = page

    def clear_attempt_log(self):
        self.attempt_log.clear()

    # ==================== Resolution ====================

    async def resolve(
        self,
        candidates: Sequence[CandidateStrategy],
        timeout: Optional[int] = None,
        element: Optional[str] = None
    ):
        """
        Find an element using candidates in the given order.

        Args:
            candidates: Strategies to try, highest priority first
            timeout: Per-attempt timeout in ms, capped at config.attempt_cap_ms
            element: Logical element name, used for messages

        Returns:
            Playwright locator for the first candidate that became visible

        Raises:
            ResolutionExhausted: No candidate located the element
        """
        locator, attempts = await self._resolve(candidates, timeout, element)
        if locator is None:
            raise ResolutionExhausted(attempts, element)
        return locator

    async def resolve_element(self, target: Target, timeout: Optional[int] = None):
        """Resolve a logical element name or a candidate list, reporting to the learner if wired"""
        element, candidates = self._candidates_for(target)
        locator, attempts = await self._resolve(candidates, timeout, element)
        self._report(element, attempts)
        if locator is None:
            raise ResolutionExhausted(attempts, element)
        return locator

    async def _resolve(
        self,
        candidates: Sequence[CandidateStrategy],
        timeout: Optional[int],
        element: Optional[str]
    ) -> Tuple[Optional[object], List[AttemptOutcome]]:
        """Try candidates in order, stopping at the first success"""
        if not candidates:
            raise ValueError("At least one candidate strategy is required")

        if timeout is None:
            timeout = self.config.attempt_timeout_ms
        wait_ms = self.config.effective_attempt_timeout(timeout)
        label = element or "element"
        attempts: List[AttemptOutcome] = []

        for candidate in candidates:
            locator, outcome = await self._attempt(candidate, wait_ms)
            attempts.append(outcome)
            self.attempt_log.append(outcome)

            if outcome.success:
                logger.info(f"Found {label} using {candidate.kind.value} strategy ({candidate.selector})")
                return locator, attempts

            logger.info(
                f"Failed to find {label} using {candidate.kind.value} strategy: {outcome.error_message}"
            )

        logger.warning(
            f"Exhausted {len(attempts)} strategies for {label}: "
            f"{', '.join(a.kind.value for a in attempts)}"
        )
        return None, attempts

    async def _attempt(
        self,
        candidate: CandidateStrategy,
        wait_ms: int
    ) -> Tuple[Optional[object], AttemptOutcome]:
        """Locate one candidate and wait for it to be visible"""
        start = time.monotonic()
        try:
            locator = build_locator(self.page, candidate)
            await locator.wait_for(state="visible", timeout=wait_ms)
        except PlaywrightError as e:
            return None, AttemptOutcome(
                kind=candidate.kind,
                selector=candidate.selector,
                success=False,
                elapsed_ms=int((time.monotonic() - start) * 1000),
                error_message=str(e).splitlines()[0] if str(e) else type(e).__name__
            )

        return locator, AttemptOutcome(
            kind=candidate.kind,
            selector=candidate.selector,
            success=True,
            elapsed_ms=int((time.monotonic() - start) * 1000)
        )

    def _candidates_for(self, target: Target) -> Tuple[Optional[str], List[CandidateStrategy]]:
        """Expand a target into (element name, ordered candidates)"""
        if isinstance(target, str):
            defaults = self.registry.get(target)
            if self.learner is not None:
                return target, self.learner.propose_order(target, defaults)
            return target, defaults
        return None, list(target)

    def _report(self, element: Optional[str], attempts: List[AttemptOutcome]):
        """Feed finished attempts to the learner"""
        if self.learner is None or element is None:
            return
        for attempt in attempts:
            self.learner.report_result(element, attempt.selector, attempt.success)

    # ==================== Actions ====================

    async def fill(self, target: Target, value: str, timeout: Optional[int] = None):
        """Fill an input located with self-healing"""
        locator = await self.resolve_element(target, timeout)
        await locator.fill(value)

    async def click(self, target: Target, timeout: Optional[int] = None):
        """Click an element located with self-healing"""
        locator = await self.resolve_element(target, timeout)
        await locator.click()

    async def exists(self, target: Target) -> bool:
        """
        Check whether an element can be located.

        Uses the shorter exists timeout and never raises. Attempts are
        reported to the learner only when the element is found; an
        absent element says nothing about how reliable its selectors are.
        """
        try:
            element, candidates = self._candidates_for(target)
            locator, attempts = await self._resolve(candidates, self.config.exists_timeout_ms, element)
        except (KeyError, ValueError) as e:
            logger.warning(f"Cannot check existence of {target!r}: {e}")
            return False

        if locator is None:
            return False

        self._report(element, attempts)
        return True

    async def get_text(self, target: Target, timeout: Optional[int] = None) -> Optional[str]:
        """Text content of an element located with self-healing"""
        locator = await self.resolve_element(target, timeout)
        return await locator.text_content()
