"""
Shared Test Fixtures for Post Remixer Application

This module provides common fixtures used across all test modules.
Fixtures include settings overrides, database connection mocks, logging
capture, model response factories and in-memory stores.
"""

import pytest
from unittest.mock import MagicMock, patch
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import List, Optional
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def mock_settings(monkeypatch):
    """
    Override the settings module with test configuration values.

    Every module reads settings through ``config.settings`` at call time,
    so patching attributes on the module is enough.

    Usage:
        def test_something(mock_settings):
            mock_settings.GOOGLE_AI_API_KEY = None
            # ... test code

    Returns:
        module: The patched config.settings module.
    """
    from config import settings

    values = {
        "GOOGLE_AI_API_KEY": "test-google-api-key",
        "DB_SERVER": "test-server",
        "DB_NAME": "test-db",
        "DB_USER": "test-user",
        "DB_PASSWORD": "test-password",
        "DB_CONNECTION_STRING": "DRIVER={Test};SERVER=test-server;DATABASE=test-db;",
        "GENERATION_MODEL": "gemini-2.0-flash",
        "GENERATION_MAX_TOKENS": 1024,
        "POST_COUNT": 5,
        "POST_CHARACTER_LIMIT": 280,
        "SEGMENT_DELIMITER": "|",
        "DEFAULT_STORE": "memory",
    }
    for name, value in values.items():
        monkeypatch.setattr(settings, name, value)

    yield settings


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def mock_db_connection():
    """
    Mock pyodbc database connection and cursor.

    This fixture provides a mock database connection that simulates
    pyodbc behavior without requiring an actual database connection.

    Usage:
        def test_database(mock_db_connection):
            conn, cursor = mock_db_connection
            cursor.fetchall.return_value = [('row1',), ('row2',)]
            # ... test code

    Returns:
        tuple: A tuple of (mock_connection, mock_cursor).
    """
    mock_cursor = MagicMock()
    mock_cursor.description = [('Saved_Post_ID',), ('Content',), ('Created_At',)]
    mock_cursor.fetchall.return_value = []
    mock_cursor.fetchone.return_value = None
    mock_cursor.rowcount = 0

    mock_conn = MagicMock()
    mock_conn.cursor.return_value = mock_cursor
    mock_conn.commit.return_value = None
    mock_conn.rollback.return_value = None
    mock_conn.close.return_value = None

    with patch('pyodbc.connect', return_value=mock_conn):
        yield mock_conn, mock_cursor


@pytest.fixture
def fake_clock():
    """
    A clock that moves forward one second on every call.

    Returns:
        callable: A zero-argument function returning increasing datetimes.
    """
    start = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    ticks = {"n": 0}

    def _now() -> datetime:
        ticks["n"] += 1
        return start + timedelta(seconds=ticks["n"])

    return _now


@pytest.fixture
def memory_store(fake_clock):
    """An empty in-memory saved posts store with a deterministic clock."""
    from data.memory_store import InMemoryPostStore
    return InMemoryPostStore(clock=fake_clock)


@pytest.fixture
def gateway(memory_store):
    """A PersistenceGateway over the in-memory store."""
    from services.persistence_service import PersistenceGateway
    return PersistenceGateway(memory_store)


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    app_logger = logging.getLogger("remixer")
    original_level = app_logger.level
    app_logger.setLevel(logging.DEBUG)
    app_logger.addHandler(handler)

    yield handler.records

    app_logger.removeHandler(handler)
    app_logger.setLevel(original_level)


# =============================================================================
# Model Response Fixtures
# =============================================================================

SAMPLE_MODEL_RESPONSE = """Here are your posts:

[POST 1]
Coffee is a ritual | Not just a drink
[POST 2]
Mornings start slow | Then the first sip hits | Everything clicks
[POST 3]
Good beans matter | So does the water
[POST 4]
I stopped adding sugar | Now I taste the fruit
[POST 5]
Cold brew in winter | Do not judge me
"""


@pytest.fixture
def sample_model_response() -> str:
    """Five well-formed post blocks preceded by a chatty intro line."""
    return SAMPLE_MODEL_RESPONSE


@pytest.fixture
def gemini_response():
    """
    Factory fixture for Gemini-shaped response objects.

    Usage:
        def test_generation(gemini_response):
            response = gemini_response("hello")
            empty = gemini_response(candidates=[])

    Returns:
        callable: A factory function for response objects.
    """
    def _create_response(text: Optional[str] = "response text",
                         candidates: Optional[List] = None,
                         parts: Optional[List] = None) -> SimpleNamespace:
        if candidates is None:
            if parts is None:
                parts = [SimpleNamespace(text=text)]
            candidates = [SimpleNamespace(
                content=SimpleNamespace(parts=parts),
                finish_reason="STOP",
            )]
        return SimpleNamespace(candidates=candidates, prompt_feedback=None)

    return _create_response


@pytest.fixture
def mock_ai_service(sample_model_response):
    """A completion service that returns the sample model response."""
    from services.ai_service import AIService

    service = MagicMock(spec=AIService)
    service.generate_completion.return_value = sample_model_response
    return service
