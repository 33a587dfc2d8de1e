"""
Locator Strategies

The closed set of mechanisms an element can be located by, and the
fixed translation of each one into a Playwright locator.

Every candidate also has a canonical selector string. The selector
ledger keys its statistics by that string, and learned selectors are
parsed back into candidates with CandidateStrategy.from_selector().
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional


class StrategyKind(Enum):
    """Supported locator mechanisms"""
    TEST_ID = "test_id"
    DOM_ID = "dom_id"
    CSS_QUERY = "css_query"
    TEXT_CONTENT = "text_content"
    SEMANTIC_ROLE = "semantic_role"
    LABEL_TEXT = "label_text"
    PLACEHOLDER_TEXT = "placeholder_text"
    STRUCTURAL_PATH = "structural_path"


_TEST_ID_RE = re.compile(r'^\[data-testid="([^"]*)"\]$')
_DOM_ID_RE = re.compile(r'^#([A-Za-z_][\w-]*)$')
_ROLE_RE = re.compile(r'^role=([\w-]+)(?:\[name="(.*)"\])?$')

# XPath expressions usable without the xpath= prefix
_PATH_PREFIXES = ("/", "(")

_PREFIXED_KINDS = {
    "text=": StrategyKind.TEXT_CONTENT,
    "label=": StrategyKind.LABEL_TEXT,
    "placeholder=": StrategyKind.PLACEHOLDER_TEXT,
    "xpath=": StrategyKind.STRUCTURAL_PATH,
}


@dataclass(frozen=True)
class CandidateStrategy:
    """One concrete way to locate a logical element"""
    kind: StrategyKind
    value: str
    name: Optional[str] = None  # accessible name, SEMANTIC_ROLE only

    @property
    def selector(self) -> str:
        """Canonical selector string for this candidate"""
        if self.kind == StrategyKind.TEST_ID:
            return f'[data-testid="{self.value}"]'
        if self.kind == StrategyKind.DOM_ID:
            return f"#{self.value}"
        if self.kind == StrategyKind.TEXT_CONTENT:
            return f"text={self.value}"
        if self.kind == StrategyKind.SEMANTIC_ROLE:
            if self.name:
                return f'role={self.value}[name="{self.name}"]'
            return f"role={self.value}"
        if self.kind == StrategyKind.LABEL_TEXT:
            return f"label={self.value}"
        if self.kind == StrategyKind.PLACEHOLDER_TEXT:
            return f"placeholder={self.value}"
        if self.kind == StrategyKind.STRUCTURAL_PATH:
            return self.value if self.value.startswith(_PATH_PREFIXES) else f"xpath={self.value}"
        return self.value

    @classmethod
    def from_selector(cls, selector: str) -> "CandidateStrategy":
        """
        Parse a canonical selector string back into a candidate.

        Anything without a recognised prefix or shape is a CSS query.
        """
        selector = selector.strip()

        for prefix, kind in _PREFIXED_KINDS.items():
            if selector.startswith(prefix):
                return cls(kind, selector[len(prefix):])

        if selector.startswith(_PATH_PREFIXES):
            return cls(StrategyKind.STRUCTURAL_PATH, selector)

        match = _ROLE_RE.match(selector)
        if match:
            return cls(StrategyKind.SEMANTIC_ROLE, match.group(1), match.group(2) or None)

        match = _TEST_ID_RE.match(selector)
        if match:
            return cls(StrategyKind.TEST_ID, match.group(1))

        match = _DOM_ID_RE.match(selector)
        if match:
            return cls(StrategyKind.DOM_ID, match.group(1))

        return cls(StrategyKind.CSS_QUERY, selector)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.selector}"


# ==================== Playwright Translation ====================

def _by_test_id(page, candidate: CandidateStrategy):
    return page.get_by_test_id(candidate.value)


def _by_dom_id(page, candidate: CandidateStrategy):
    return page.locator(f"#{candidate.value}")


def _by_css(page, candidate: CandidateStrategy):
    return page.locator(candidate.value)


def _by_text(page, candidate: CandidateStrategy):
    return page.get_by_text(candidate.value, exact=False)


def _by_role(page, candidate: CandidateStrategy):
    if candidate.name:
        return page.get_by_role(candidate.value, name=candidate.name)
    return page.get_by_role(candidate.value)


def _by_label(page, candidate: CandidateStrategy):
    return page.get_by_label(candidate.value)


def _by_placeholder(page, candidate: CandidateStrategy):
    return page.get_by_placeholder(candidate.value)


def _by_structural_path(page, candidate: CandidateStrategy):
    return page.locator(f"xpath={candidate.value}")


_LOCATOR_BUILDERS: Dict[StrategyKind, Callable] = {
    StrategyKind.TEST_ID: _by_test_id,
    StrategyKind.DOM_ID: _by_dom_id,
    StrategyKind.CSS_QUERY: _by_css,
    StrategyKind.TEXT_CONTENT: _by_text,
    StrategyKind.SEMANTIC_ROLE: _by_role,
    StrategyKind.LABEL_TEXT: _by_label,
    StrategyKind.PLACEHOLDER_TEXT: _by_placeholder,
    StrategyKind.STRUCTURAL_PATH: _by_structural_path,
}

_untranslated = [kind.value for kind in StrategyKind if kind not in _LOCATOR_BUILDERS]
if _untranslated:
    raise ImportError(f"No locator translation for strategy kinds: {', '.join(_untranslated)}")


def build_locator(page, candidate: CandidateStrategy):
    """Get a Playwright locator for a candidate strategy (lazy, not yet resolved)"""
    return _LOCATOR_BUILDERS[candidate.kind](page, candidate)
