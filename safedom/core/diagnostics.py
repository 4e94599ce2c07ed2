"""
Development-Mode Diagnostics

Hook point used by the sanitizers when a value fails sanitization. In dev mode
each failure is handed to a diagnostic sink (by default a WARNING on the
``safedom.diagnostics`` logger) together with the original value and a pointer
to the XSS documentation. Outside dev mode nothing is emitted.

Emission is best effort: a failing sink is logged at debug level and never
propagates into the sanitize call, and nothing here influences return values.

Usage:
    from safedom.core.diagnostics import set_dev_mode, set_diagnostic_sink

    set_dev_mode(True)
    set_diagnostic_sink(lambda diagnostic: collected.append(diagnostic))
"""

from collections.abc import Callable
from dataclasses import dataclass

from safedom.core.logging_config import get_logger, log_with_context
from safedom.secure_config import get_config

logger = get_logger(__name__)
diagnostics_logger = get_logger("safedom.diagnostics")

SECURITY_DOCS_URL = "http://g.co/ng/security#xss"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single sanitization failure report.

    Attributes:
        context: Name of the context that rejected the value (html, style, url)
        value: The original, unsafe value
        message: Human-readable description including the documentation pointer
    """

    context: str
    value: str
    message: str


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: write the diagnostic as a structured warning."""
    log_with_context(
        diagnostics_logger,
        "warning",
        diagnostic.message,
        context=diagnostic.context,
        value=diagnostic.value,
    )


# Process-wide overrides; None means "use configuration / default sink"
_dev_mode_override: bool | None = None
_sink: DiagnosticSink = log_diagnostic


def set_dev_mode(enabled: bool | None) -> None:
    """
    Force dev mode on or off for the whole process.

    Args:
        enabled: True/False to override, None to fall back to SAFEDOM_DEV_MODE
    """
    global _dev_mode_override
    _dev_mode_override = enabled


def is_dev_mode() -> bool:
    """
    Return whether sanitization failures should be reported.

    Raises:
        ConfigurationError: If SAFEDOM_DEV_MODE is set to an invalid value
    """
    if _dev_mode_override is not None:
        return _dev_mode_override
    return get_config().get_sanitizer_config().dev_mode


def set_diagnostic_sink(sink: DiagnosticSink | None) -> None:
    """
    Replace the diagnostic sink.

    Args:
        sink: Callable receiving each Diagnostic, or None to restore logging
    """
    global _sink
    _sink = sink if sink is not None else log_diagnostic


def report_unsafe_value(context: str, value: str, message: str) -> None:
    """
    Report a value that failed sanitization (dev mode only).

    Args:
        context: Name of the rejecting context
        value: The original, unsafe value
        message: Description of what happened, without the documentation pointer
    """
    try:
        if not is_dev_mode():
            return
        _sink(Diagnostic(context=context, value=value, message=f"{message} (see {SECURITY_DOCS_URL})"))
    except Exception:
        logger.debug("Dropped sanitization diagnostic", exc_info=True)
