"""
Pytest configuration and shared fixtures

Provides the sanitization service, a diagnostics collector, and isolation of
process-wide state (dev mode, diagnostic sink, logging handlers) between tests.
"""

import logging

import pytest

from safedom.core import diagnostics
from safedom.core.logging_config import ContextFormatter, JSONFormatter
from safedom.security import DomSanitizationService


@pytest.fixture(autouse=True)
def isolate_process_state(monkeypatch):
    """Reset dev mode, the diagnostic sink and handlers added by setup_logging() after each test"""
    monkeypatch.delenv("SAFEDOM_DEV_MODE", raising=False)
    monkeypatch.delenv("SAFEDOM_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SAFEDOM_LOG_JSON", raising=False)

    root_logger = logging.getLogger()
    level = root_logger.level

    yield

    diagnostics.set_dev_mode(None)
    diagnostics.set_diagnostic_sink(None)
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, (JSONFormatter, ContextFormatter)):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def service():
    """Provide the shared DomSanitizationService"""
    return DomSanitizationService()


@pytest.fixture
def collected_diagnostics():
    """Enable dev mode and collect every diagnostic into a list"""
    collected = []
    diagnostics.set_dev_mode(True)
    diagnostics.set_diagnostic_sink(collected.append)
    return collected
