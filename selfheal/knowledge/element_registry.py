"""
Element Registry - Default locator strategies for logical elements

Maps each logical element name (e.g. "usernameField") to its candidate
strategies in priority order: first entry is tried first. This is the
"Day 0" knowledge the resolver works from before any learning happens.

Extending the suite means editing these mappings, not calling an API.
"""

from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from ..core.strategies import CandidateStrategy, StrategyKind


# ============================================================
# LOGIN PAGE
# ============================================================
LOGIN_PAGE_ELEMENTS: Dict[str, Dict[str, Any]] = {
    "usernameField": {
        "test_id": "username-input",
        "dom_id": "username",
        "css_query": 'input[type="email"], input[name="username"]',
        "placeholder_text": "Email or username",
        "label_text": "Username",
        "structural_path": '//label[contains(text(), "Username") or contains(text(), "Email")]//following-sibling::input'
    },
    "passwordField": {
        "test_id": "password-input",
        "dom_id": "password",
        "css_query": 'input[type="password"]',
        "placeholder_text": "Password",
        "label_text": "Password",
        "structural_path": '//label[contains(text(), "Password")]//following-sibling::input'
    },
    "submitButton": {
        "test_id": "login-submit",
        "css_query": 'button[type="submit"], input[type="submit"]',
        "text_content": "Sign In",
        "semantic_role": {"role": "button", "name": "Sign In"},
        "structural_path": '//button[contains(text(), "Sign In") or contains(text(), "Log In") or contains(text(), "Login")]'
    },
    "forgotPasswordLink": {
        "test_id": "forgot-password",
        "css_query": 'a.forgot-password, a[href*="forgot"]',
        "text_content": "Forgot Password",
        "structural_path": '//a[contains(text(), "Forgot")]'
    },
    "usernameError": {
        "test_id": "username-error",
        "dom_id": "username-error",
        "css_query": '.username-error, #username-error, [aria-describedby="username"]',
        "structural_path": '//input[@id="username"]/following-sibling::div[contains(@class, "error")]'
    },
    "passwordError": {
        "test_id": "password-error",
        "dom_id": "password-error",
        "css_query": '.password-error, #password-error, [aria-describedby="password"]',
        "structural_path": '//input[@id="password"]/following-sibling::div[contains(@class, "error")]'
    },
    "loginForm": {
        "test_id": "login-form",
        "css_query": "form, .login-form",
        "semantic_role": {"role": "form"},
        "structural_path": '//form[.//input[@type="password"]]'
    },
    "rememberMeCheckbox": {
        "test_id": "remember-me",
        "dom_id": "remember",
        "css_query": 'input[type="checkbox"]',
        "label_text": "Remember me",
        "structural_path": '//label[contains(text(), "Remember")]//input[@type="checkbox"]'
    },
}


# ============================================================
# DASHBOARD
# ============================================================
DASHBOARD_ELEMENTS: Dict[str, Dict[str, Any]] = {
    "welcomeMessage": {
        "test_id": "welcome-message",
        "css_query": ".welcome-message, .greeting",
        "structural_path": '//h1[contains(text(), "Welcome") or contains(text(), "Dashboard")]'
    },
    "logoutButton": {
        "test_id": "logout-button",
        "css_query": ".logout, button.logout, a.logout",
        "text_content": "Logout",
        "semantic_role": {"role": "button", "name": "Logout"},
        "structural_path": '//button[contains(text(), "Logout") or contains(text(), "Sign Out")]'
    },
    "userMenu": {
        "test_id": "user-menu",
        "css_query": ".user-menu, .profile-menu",
        "structural_path": '//div[contains(@class, "user-menu") or contains(@class, "profile")]'
    },
    "navigationItems": {
        "test_id": "nav-item",
        "css_query": "nav a, .sidebar a, .navigation a",
        "structural_path": "//nav//a"
    },
}


def candidates_from_entries(entries: Mapping[str, Any]) -> List[CandidateStrategy]:
    """
    Convert a raw {kind: value} mapping into ordered candidates.

    Role entries take a {"role": ..., "name": ...} dict; every other
    kind takes a plain string.
    """
    candidates = []
    for kind_name, value in entries.items():
        kind = StrategyKind(kind_name)
        if kind == StrategyKind.SEMANTIC_ROLE:
            candidates.append(CandidateStrategy(kind, value["role"], value.get("name") or None))
        else:
            candidates.append(CandidateStrategy(kind, value))
    return candidates


class SelectorRegistry:
    """
    Read-only mapping of logical element -> default candidate strategies.

    Invariants are checked once, at construction: every element has at
    least one candidate and no (kind, value) pair appears twice.
    """

    def __init__(self, elements: Mapping[str, Sequence[CandidateStrategy]]):
        self._elements: Dict[str, Tuple[CandidateStrategy, ...]] = {}

        for element, candidates in elements.items():
            if not candidates:
                raise ValueError(f"Element '{element}' has no candidate strategies")

            seen = set()
            for candidate in candidates:
                key = (candidate.kind, candidate.value, candidate.name)
                if key in seen:
                    raise ValueError(
                        f"Element '{element}' lists {candidate.kind.value} '{candidate.value}' more than once"
                    )
                seen.add(key)

            self._elements[element] = tuple(candidates)

    @classmethod
    def from_entries(cls, elements: Mapping[str, Mapping[str, Any]]) -> "SelectorRegistry":
        """Build a registry from raw {element: {kind: value}} mappings"""
        return cls({
            element: candidates_from_entries(entries)
            for element, entries in elements.items()
        })

    def get(self, element: str) -> List[CandidateStrategy]:
        """Default candidates for an element, highest priority first"""
        if element not in self._elements:
            raise KeyError(f"Unknown logical element: '{element}'")
        return list(self._elements[element])

    def elements(self) -> List[str]:
        return list(self._elements)

    def __contains__(self, element: str) -> bool:
        return element in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)


DEFAULT_REGISTRY = SelectorRegistry.from_entries({**LOGIN_PAGE_ELEMENTS, **DASHBOARD_ELEMENTS})
