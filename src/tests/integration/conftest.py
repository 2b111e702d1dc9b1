"""Integration test fixtures: real structlog configuration, reset per test."""

import pytest
import structlog
from structlog.testing import LogCapture


@pytest.fixture
def log_capture():
    """Configure structlog to merge context variables into captured events."""
    capture = LogCapture()
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        cache_logger_on_first_use=False,
    )
    yield capture
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
