"""
Unit tests for locator strategies.

Tests canonical selector strings, parsing them back, and the
translation of each strategy kind into a Playwright locator call.
"""

import pytest

from selfheal.core.strategies import CandidateStrategy, StrategyKind, build_locator


class TestCanonicalSelector:
    """Test the canonical selector string of each kind."""

    def test_test_id(self):
        assert CandidateStrategy(StrategyKind.TEST_ID, "login-submit").selector == '[data-testid="login-submit"]'

    def test_dom_id(self):
        assert CandidateStrategy(StrategyKind.DOM_ID, "username").selector == "#username"

    def test_css_query_is_verbatim(self):
        candidate = CandidateStrategy(StrategyKind.CSS_QUERY, 'button[type="submit"], input[type="submit"]')

        assert candidate.selector == 'button[type="submit"], input[type="submit"]'

    def test_text_content(self):
        assert CandidateStrategy(StrategyKind.TEXT_CONTENT, "Sign In").selector == "text=Sign In"

    def test_semantic_role_with_name(self):
        candidate = CandidateStrategy(StrategyKind.SEMANTIC_ROLE, "button", "Sign In")

        assert candidate.selector == 'role=button[name="Sign In"]'

    def test_semantic_role_without_name(self):
        assert CandidateStrategy(StrategyKind.SEMANTIC_ROLE, "form").selector == "role=form"

    def test_label_and_placeholder(self):
        assert CandidateStrategy(StrategyKind.LABEL_TEXT, "Password").selector == "label=Password"
        assert CandidateStrategy(StrategyKind.PLACEHOLDER_TEXT, "Email").selector == "placeholder=Email"

    def test_structural_path(self):
        """Absolute paths are kept as-is, anything else gets the xpath= prefix."""
        assert CandidateStrategy(StrategyKind.STRUCTURAL_PATH, "//form//button").selector == "//form//button"
        assert CandidateStrategy(StrategyKind.STRUCTURAL_PATH, "button[1]").selector == "xpath=button[1]"

    def test_parenthesized_structural_path(self):
        candidate = CandidateStrategy(StrategyKind.STRUCTURAL_PATH, "(//a)[1]")

        assert candidate.selector == "(//a)[1]"

    def test_str_includes_kind(self):
        candidate = CandidateStrategy(StrategyKind.DOM_ID, "username")

        assert str(candidate) == "dom_id:#username"


class TestFromSelector:
    """Test parsing selector strings into candidates."""

    @pytest.mark.parametrize("candidate", [
        CandidateStrategy(StrategyKind.TEST_ID, "login-submit"),
        CandidateStrategy(StrategyKind.DOM_ID, "username"),
        CandidateStrategy(StrategyKind.TEXT_CONTENT, "Sign In"),
        CandidateStrategy(StrategyKind.SEMANTIC_ROLE, "button", "Sign In"),
        CandidateStrategy(StrategyKind.SEMANTIC_ROLE, "form"),
        CandidateStrategy(StrategyKind.STRUCTURAL_PATH, '//button[contains(text(), "Sign In")]'),
    ])
    def test_canonical_selectors_parse_back(self, candidate):
        """Test that a canonical selector yields the same candidate."""
        assert CandidateStrategy.from_selector(candidate.selector) == candidate

    def test_parenthesized_path_is_structural(self):
        parsed = CandidateStrategy.from_selector("(//nav//a)[2]")

        assert parsed == CandidateStrategy(StrategyKind.STRUCTURAL_PATH, "(//nav//a)[2]")

    def test_class_selector_is_css(self):
        parsed = CandidateStrategy.from_selector(".btn")

        assert parsed.kind == StrategyKind.CSS_QUERY
        assert parsed.value == ".btn"

    def test_compound_id_selector_is_css(self):
        """Only a bare #ident is a DOM id."""
        parsed = CandidateStrategy.from_selector("#login-form button")

        assert parsed.kind == StrategyKind.CSS_QUERY

    def test_tag_qualified_attribute_is_css(self):
        parsed = CandidateStrategy.from_selector('button[type="submit"]')

        assert parsed.kind == StrategyKind.CSS_QUERY
        assert parsed.value == 'button[type="submit"]'

    def test_surrounding_whitespace_ignored(self):
        parsed = CandidateStrategy.from_selector("  #username  ")

        assert parsed == CandidateStrategy(StrategyKind.DOM_ID, "username")


class TestBuildLocator:
    """Test translation into Playwright locator calls."""

    def test_test_id(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.TEST_ID, "login-submit"))

        mock_page.get_by_test_id.assert_called_once_with("login-submit")

    def test_dom_id(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.DOM_ID, "username"))

        mock_page.locator.assert_called_once_with("#username")

    def test_css_query(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.CSS_QUERY, "form, .login-form"))

        mock_page.locator.assert_called_once_with("form, .login-form")

    def test_text_content_is_substring_match(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.TEXT_CONTENT, "Sign In"))

        mock_page.get_by_text.assert_called_once_with("Sign In", exact=False)

    def test_semantic_role_with_name(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.SEMANTIC_ROLE, "button", "Sign In"))

        mock_page.get_by_role.assert_called_once_with("button", name="Sign In")

    def test_semantic_role_without_name(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.SEMANTIC_ROLE, "form"))

        mock_page.get_by_role.assert_called_once_with("form")

    def test_label_text(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.LABEL_TEXT, "Username"))

        mock_page.get_by_label.assert_called_once_with("Username")

    def test_placeholder_text(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.PLACEHOLDER_TEXT, "Password"))

        mock_page.get_by_placeholder.assert_called_once_with("Password")

    def test_structural_path(self, mock_page):
        build_locator(mock_page, CandidateStrategy(StrategyKind.STRUCTURAL_PATH, "//nav//a"))

        mock_page.locator.assert_called_once_with("xpath=//nav//a")

    def test_every_kind_translates(self, mock_page):
        """Test that no strategy kind is left without a translation."""
        for kind in StrategyKind:
            locator = build_locator(mock_page, CandidateStrategy(kind, "value"))

            assert locator is not None

    def test_build_does_not_wait(self, mock_page):
        """Building a locator is lazy; nothing is awaited."""
        locator = build_locator(mock_page, CandidateStrategy(StrategyKind.DOM_ID, "username"))

        locator.wait_for.assert_not_called()
