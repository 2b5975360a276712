# Shared pytest fixtures for pathignore tests

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logging():
    # The CLI reconfigures the root logger; put it back after each test
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
