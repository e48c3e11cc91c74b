"""
Shared fixtures for the integrity and poll analytics tests.
"""

from datetime import datetime, timedelta

import pytest

from integrity_engine.models import ProctoringEvent


BASE_TIME = datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def make_events():
    """Build a session from event type names, five seconds apart."""
    def _make(*event_types, start=BASE_TIME, step_seconds=5):
        return [
            ProctoringEvent(event_type, start + timedelta(seconds=index * step_seconds))
            for index, event_type in enumerate(event_types)
        ]
    return _make


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration overrides that may be set in the shell."""
    for name in (
        "INTEGRITY_DEDUCTION_PER_VIOLATION",
        "INTEGRITY_MAX_VIOLATIONS",
        "INTEGRITY_STRICTNESS",
        "WORDCLOUD_MAX_WORDS",
        "WORDCLOUD_EXCLUDE_NUMBERS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
