"""
safedom - context-sensitive output sanitization

Sanitizes untrusted strings for HTML, CSS style, URL and resource URL
bindings, and provides trusted-value wrappers for the rare cases where
sanitization must be bypassed.

Usage:
    from safedom import DomSanitizationService, SecurityContext

    service = DomSanitizationService()
    service.sanitize(SecurityContext.HTML, "ha <script>evil()</script>")  # 'ha '
"""

from .security import (
    DomSanitizationService,
    SafeHtml,
    SafeResourceUrl,
    SafeStyle,
    SafeUrl,
    SafeValue,
    SanitizationService,
    SecurityContext,
    UnsupportedContextError,
    ValidationError,
    safe_html,
    safe_style,
    safe_url,
    sanitize_html,
    sanitize_style,
    sanitize_url,
)

__version__ = "1.0.0"

__all__ = [
    "DomSanitizationService",
    "SanitizationService",
    "SecurityContext",
    "SafeValue",
    "SafeHtml",
    "SafeStyle",
    "SafeUrl",
    "SafeResourceUrl",
    "ValidationError",
    "UnsupportedContextError",
    "sanitize_html",
    "sanitize_style",
    "sanitize_url",
    "safe_html",
    "safe_style",
    "safe_url",
]
