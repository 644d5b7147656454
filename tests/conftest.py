import os

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Ensure tests run without ROUTEMACRO_* overrides from the environment."""
    for key in [k for k in os.environ.keys() if k.startswith("ROUTEMACRO_")]:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def log_messages():
    """Capture loguru messages (level name, text) emitted during a test."""
    messages: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: messages.append(
            (message.record["level"].name, message.record["message"])
        ),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
