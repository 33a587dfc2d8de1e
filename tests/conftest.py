"""
Pytest configuration and shared fixtures for selfheal tests.
"""

import pytest
from unittest.mock import Mock, AsyncMock

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from selfheal.knowledge.history_store import InMemoryHistoryStore
from selfheal.knowledge.selector_learner import SelectorLearner


def make_locator(found: bool = True, text: str = "Test Content"):
    """Create a mock Playwright locator that either becomes visible or times out."""
    locator = AsyncMock()

    if found:
        locator.wait_for = AsyncMock(return_value=None)
    else:
        locator.wait_for = AsyncMock(
            side_effect=PlaywrightTimeoutError("Timeout 2000ms exceeded.")
        )

    locator.fill = AsyncMock()
    locator.click = AsyncMock()
    locator.is_visible = AsyncMock(return_value=found)
    locator.text_content = AsyncMock(return_value=text)

    return locator


# ==================== Locator Factory Fixture ====================

@pytest.fixture
def locator_factory():
    """Factory for found / not-found locators."""
    return make_locator


# ==================== Mock Page Fixture ====================

@pytest.fixture
def mock_page():
    """Create a mock Playwright page where every lookup finds the element."""
    page = AsyncMock()

    page.url = "https://example.com/login"

    mock_locator = make_locator(found=True)

    page.locator = Mock(return_value=mock_locator)
    page.get_by_text = Mock(return_value=mock_locator)
    page.get_by_label = Mock(return_value=mock_locator)
    page.get_by_placeholder = Mock(return_value=mock_locator)
    page.get_by_role = Mock(return_value=mock_locator)
    page.get_by_test_id = Mock(return_value=mock_locator)

    page.query_selector = AsyncMock(return_value=None)

    return page


@pytest.fixture
def missing_page(mock_page):
    """Mock page where no lookup ever finds the element."""
    missing = make_locator(found=False)

    mock_page.locator.return_value = missing
    mock_page.get_by_text.return_value = missing
    mock_page.get_by_label.return_value = missing
    mock_page.get_by_placeholder.return_value = missing
    mock_page.get_by_role.return_value = missing
    mock_page.get_by_test_id.return_value = missing

    return mock_page


# ==================== Learner Fixtures ====================

@pytest.fixture
def memory_store():
    """Empty in-memory history store."""
    return InMemoryHistoryStore()


@pytest.fixture
def learner(memory_store):
    """Selector learner over an in-memory store, history loaded."""
    selector_learner = SelectorLearner(store=memory_store)
    selector_learner.load_history()
    return selector_learner


# ==================== Sample Data ====================

@pytest.fixture
def submit_button_snapshot():
    """Element snapshot of a login submit button."""
    return {
        "tag": "button",
        "id": "login-submit",
        "classes": ["btn", "primary"],
        "attributes": {"data-testid": "submit", "type": "submit"},
        "text": "Sign In"
    }
