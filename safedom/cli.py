"""
Command-Line Sanitizer

Sanitizes one value for a security context and prints the result. Handy for
checking how a binding would render a given value.

Usage:
    python -m safedom url "javascript:alert(1)"
    echo '<b onclick="x()">hi</b>' | python -m safedom html
    python -m safedom resource-url --trust https://cdn.example.com/app.js

Exit codes:
    0  Value sanitized (or passed through) and printed
    1  Invalid configuration
    2  The context rejected the value (UnsupportedContextError)
"""

import argparse
import sys

from safedom.core.diagnostics import set_dev_mode
from safedom.core.logging_config import get_logger, setup_logging
from safedom.secure_config import ConfigurationError, get_config
from safedom.security import DomSanitizationService, SecurityContext, UnsupportedContextError

logger = get_logger(__name__)

CONTEXT_CHOICES = {
    "html": SecurityContext.HTML,
    "style": SecurityContext.STYLE,
    "url": SecurityContext.URL,
    "resource-url": SecurityContext.RESOURCE_URL,
}


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="safedom",
        description="Sanitize a value for an HTML, style, URL or resource URL binding",
    )

    parser.add_argument("context", choices=sorted(CONTEXT_CHOICES), help="Security context of the binding")

    parser.add_argument("value", nargs="?", help="Value to sanitize (default: read from stdin)")

    parser.add_argument(
        "--trust",
        action="store_true",
        help="Mark the value as trusted for the context instead of sanitizing it",
    )

    parser.add_argument(
        "--dev-mode",
        action="store_true",
        help="Report values that fail sanitization (overrides SAFEDOM_DEV_MODE)",
    )

    # Flags may sit between the context and the value
    return parser.parse_intermixed_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for ``python -m safedom``.

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)

    try:
        config = get_config().get_sanitizer_config()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(level=config.log_level, json_output=config.log_json)
    if args.dev_mode:
        set_dev_mode(True)

    value = args.value if args.value is not None else sys.stdin.read().rstrip("\n")
    context = CONTEXT_CHOICES[args.context]
    service = DomSanitizationService()

    bound = service.bypass_security_trust(context, value) if args.trust else value
    try:
        result = service.sanitize(context, bound)
    except UnsupportedContextError as e:
        logger.error(f"Binding rejected: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(result)
    return 0
