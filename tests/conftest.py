import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def load_fixture() -> Callable[[str], Any]:
    """Return a loader decoding ``tests/fixtures/<name>`` as JSON."""

    def _load(name: str) -> Any:
        return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture
def isolate_logging():
    """Isolate logging configuration between tests to prevent CI issues.

    This fixture prevents logging StreamHandler issues that occur in CI environments
    where stderr/stdout streams may be closed during test cleanup (the CLI
    ``--verbose`` flag installs a handler on the root logger).
    """
    # Store original logging state
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    # Clear all handlers to prevent stream access issues
    logging.root.handlers.clear()

    # Add a null handler that won't cause stream issues
    null_handler = logging.NullHandler()
    logging.root.addHandler(null_handler)

    yield

    # Restore original logging state
    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)
