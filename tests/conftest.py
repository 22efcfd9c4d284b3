"""
Pytest configuration and fixtures for formcheck tests

This module provides shared fixtures for unit and integration tests.
"""
import pytest

from formcheck.adapters import InMemoryFieldSource, InMemoryFieldSurface
from formcheck.core.orchestrator import FormValidator
from formcheck.core.rules import RuleRegistry


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests of a single component"
    )
    config.addinivalue_line(
        "markers", "integration: Tests driving a whole form through the in-memory adapters"
    )


# =======================
# ADAPTER FIXTURES
# =======================

@pytest.fixture
def source() -> InMemoryFieldSource:
    """Field source holding a typical sign-up form"""
    return InMemoryFieldSource({
        "username": "alice",
        "email": "alice@example.com",
        "age": 30,
    })


@pytest.fixture
def surface() -> InMemoryFieldSurface:
    """Surface with both a form and a submit control"""
    return InMemoryFieldSurface()


@pytest.fixture
def registry() -> RuleRegistry:
    """Fresh registry with the default rules"""
    return RuleRegistry()


@pytest.fixture
def form(source, surface, registry) -> FormValidator:
    """Uninitialized form validator over the in-memory adapters"""
    return FormValidator(source, surface, registry=registry, form_id="signup")


class ActionRecorder:
    """Callable recording every list of messages it is invoked with"""

    def __init__(self):
        self.calls: list[list[str]] = []

    def __call__(self, messages: list[str]) -> None:
        self.calls.append(messages)


@pytest.fixture
def recorder() -> ActionRecorder:
    return ActionRecorder()
