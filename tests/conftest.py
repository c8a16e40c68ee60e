"""
Pytest configuration.

Live-API tests are marked slow and skipped unless --run-slow is given.
Process-wide gemimg state (global config, logger levels) is reset after each test.
"""

import logging

import pytest

from gemimg.core import config as config_module
from gemimg.logging_config import API_LOGGER_NAME, ROOT_LOGGER_NAME


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (live Gemini API). Default: skip them.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-slow", False):
        return
    skip_slow = pytest.mark.skip(reason="Slow test; run with --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def _reset_gemimg_state():
    yield
    config_module._global_config = None
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.NOTSET)
    logging.getLogger(API_LOGGER_NAME).setLevel(logging.NOTSET)
