"""Shared fixtures for logaspect tests.

Call lines are captured with caplog on a dedicated logger so tests never
depend on the process-wide call logger configuration.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator

import pytest

from logaspect.constants import TRACE_LEVEL_NUM
from logaspect.interceptor import CallInterceptor, set_call_interceptor
from logaspect.request_context import clear_current_request

TEST_LOGGER_NAME = "logaspect.tests.calls"

# Fake clock step: every intercepted call reports this elapsed time
CLOCK_STEP_MS = 7


@pytest.fixture
def call_logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    """Logger capturing every severity, including TRACE."""
    logger = logging.getLogger(TEST_LOGGER_NAME)
    logger.propagate = True
    caplog.set_level(TRACE_LEVEL_NUM, logger=TEST_LOGGER_NAME)
    return logger


@pytest.fixture
def fake_clock() -> itertools.count:
    """Millisecond clock advancing CLOCK_STEP_MS per reading."""
    return itertools.count(1_000, CLOCK_STEP_MS)


@pytest.fixture
def interceptor(call_logger: logging.Logger, fake_clock: itertools.count) -> Iterator[CallInterceptor]:
    """Interceptor writing to the test logger, installed as process default."""
    interceptor = CallInterceptor(logger=call_logger, clock=lambda: next(fake_clock))
    set_call_interceptor(interceptor)
    yield interceptor
    set_call_interceptor(None)


@pytest.fixture(autouse=True)
def _no_active_request() -> Iterator[None]:
    """Make sure no request binding leaks between tests."""
    clear_current_request()
    yield
    clear_current_request()


@pytest.fixture
def call_records(caplog: pytest.LogCaptureFixture):
    """Return a function listing captured (levelname, message) pairs from the test logger."""

    def _records() -> list[tuple[str, str]]:
        return [(r.levelname, r.getMessage()) for r in caplog.records if r.name == TEST_LOGGER_NAME]

    return _records


@pytest.fixture
def clock_step() -> int:
    """Elapsed milliseconds the fake clock reports for every call."""
    return CLOCK_STEP_MS
