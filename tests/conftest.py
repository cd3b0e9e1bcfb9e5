"""Root test configuration — session-level cleanup of runtime artifacts"""

from pathlib import Path

import pytest

from lessonmark.core.utils.ids import RandomIdGenerator, set_default_generator


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["lessonmark.db", "test.db"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()


@pytest.fixture(autouse=True)
def restore_default_ids():
    """Tests may swap the process-wide id generator; put a fresh random one back."""
    yield
    set_default_generator(RandomIdGenerator())
