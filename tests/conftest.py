"""Shared pytest fixtures for webcore test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings around tests that patch the environment."""
    from webcore.core.config import get_problem_settings

    get_problem_settings.cache_clear()
    yield
    get_problem_settings.cache_clear()


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    """Treat empty baseline collection as success."""
    if exitstatus == 5:
        session.exitstatus = 0
