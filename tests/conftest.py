"""Pytest configuration and shared fixtures."""

import pytest

from proctor_scheduler.domain.store import EntityStore
from proctor_scheduler.services.editor import AssignmentEditor


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def store():
    """Empty in-memory entity store."""
    return EntityStore()


@pytest.fixture
def editor(store):
    return AssignmentEditor(store)


@pytest.fixture
def staff(editor):
    """Four teachers, added in a non-alphabetical branch order."""
    return [
        editor.add_teacher("Ali Kaya", "Matematik"),
        editor.add_teacher("Veli Şahin", "Fizik"),
        editor.add_teacher("Can Öztürk", "Biyoloji"),
        editor.add_teacher("Deniz Ak", "Coğrafya"),
    ]
