"""
Core pytest configuration and fixtures for careerguide testing.

This module provides shared test data, completion-service doubles and agent
fixtures used across the unit and integration suites.
"""

from typing import List
from unittest.mock import MagicMock

import pytest
from careerguide.agent import CareerAgent
from careerguide.errors import ConfigurationError, TransportError
from careerguide.llm import CompletionService, Echo
from careerguide.models import (
    CompletionOptions,
    ConversationState,
    Message,
    RoleCategory,
    Speaker,
    Stage,
)

# ===== TEST DATA FIXTURES =====


@pytest.fixture
def sample_messages() -> List[Message]:
    """A short exchange between user and agent."""
    return [
        Message(speaker=Speaker.USER, text="Hi, I need some career advice."),
        Message(
            speaker=Speaker.AGENT,
            text="Happy to help! Where are you in your career journey?",
        ),
        Message(speaker=Speaker.USER, text="I'm a student studying statistics."),
        Message(
            speaker=Speaker.AGENT,
            text="Great. Data science could be a strong fit for you.",
        ),
    ]


@pytest.fixture
def known_state() -> ConversationState:
    """State with stage and role already identified."""
    return ConversationState(
        stage=Stage.INTERVIEWING,
        role=RoleCategory.DATA_SCIENCE,
        turns_since_start=1,
    )


@pytest.fixture
def fast_options() -> CompletionOptions:
    return CompletionOptions(temperature=0.2, max_tokens=200, timeout=5.0)


# ===== COMPLETION SERVICE FIXTURES =====


@pytest.fixture
def mock_llm():
    """Completion service that always answers."""
    mock = MagicMock(spec=CompletionService)
    mock.complete.return_value = "Mock completion response"
    return mock


@pytest.fixture
def failing_llm():
    """Completion service whose backend is down."""
    mock = MagicMock(spec=CompletionService)
    mock.complete.side_effect = TransportError("Service unavailable", status_code=503)
    return mock


@pytest.fixture
def unconfigured_llm():
    """Completion service with no credential."""
    mock = MagicMock(spec=CompletionService)
    mock.complete.side_effect = ConfigurationError("API key not configured")
    return mock


# ===== AGENT FIXTURES =====


@pytest.fixture
def agent(mock_llm) -> CareerAgent:
    """Agent wired to a successful mock completion service."""
    return CareerAgent(llm=mock_llm)


@pytest.fixture
def offline_agent(failing_llm) -> CareerAgent:
    """Agent whose completion service always fails."""
    return CareerAgent(llm=failing_llm)


@pytest.fixture
def echo_agent() -> CareerAgent:
    return CareerAgent(llm=Echo())


@pytest.fixture
def no_provider_env(monkeypatch):
    """Removes provider credentials from the environment."""
    for var in (
        "AI_PROVIDER",
        "AI_MODEL",
        "AI_ENDPOINT",
        "GROQ_API_KEY",
        "OPENROUTER_API_KEY",
        "OPENAI_API_KEY",
        "AI_API_KEY",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("careerguide.config.load_dotenv", lambda *args, **kwargs: False)


# ===== CONFIGURATION =====


def pytest_configure(config):
    """Pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
