"""
Context-Sensitive Output Sanitization

This package sanitizes untrusted values for the DOM context they are bound to,
preventing Cross-Site Scripting (XSS), and lets callers explicitly mark single
values as trusted.

Package Structure:
    - contexts: SecurityContext enum (HTML, STYLE, URL, RESOURCE_URL)
    - validation: ValidationError and UnsupportedContextError
    - safe_values: SafeValue wrappers, one per context
    - url_sanitizer: scheme allow-list for hyperlinks
    - style_sanitizer: grammar for CSS property values
    - html_policy: element/attribute allow-lists
    - html_sanitizer: tree-based HTML fragment sanitizer
    - sanitization_service: DomSanitizationService dispatch and bypass API

Usage:
    from safedom.security import DomSanitizationService, SecurityContext

    service = DomSanitizationService()
    href = service.sanitize(SecurityContext.URL, user_supplied_url)
"""

from .contexts import SecurityContext
from .html_policy import DEFAULT_POLICY, HtmlSanitizationPolicy
from .html_sanitizer import HtmlSanitizer, sanitize_html
from .safe_values import SafeHtml, SafeResourceUrl, SafeStyle, SafeUrl, SafeValue, unwrap_safe_value
from .sanitization_service import DomSanitizationService, SanitizationService
from .style_sanitizer import UNSAFE_STYLE_VALUE, sanitize_style
from .url_sanitizer import UNSAFE_URL_PREFIX, is_safe_url, sanitize_url
from .validation import UnsupportedContextError, ValidationError


# Convenience functions for common use cases
def safe_html(value) -> str | None:
    """Convenience wrapper for DomSanitizationService().sanitize_html()"""
    return DomSanitizationService().sanitize_html(value)


def safe_style(value) -> str | None:
    """Convenience wrapper for DomSanitizationService().sanitize_style()"""
    return DomSanitizationService().sanitize_style(value)


def safe_url(value) -> str | None:
    """Convenience wrapper for DomSanitizationService().sanitize_url()"""
    return DomSanitizationService().sanitize_url(value)


# Public API
__all__ = [
    "SecurityContext",
    "ValidationError",
    "UnsupportedContextError",
    "SafeValue",
    "SafeHtml",
    "SafeStyle",
    "SafeUrl",
    "SafeResourceUrl",
    "unwrap_safe_value",
    "SanitizationService",
    "DomSanitizationService",
    "HtmlSanitizationPolicy",
    "HtmlSanitizer",
    "DEFAULT_POLICY",
    "UNSAFE_STYLE_VALUE",
    "UNSAFE_URL_PREFIX",
    "sanitize_html",
    "sanitize_style",
    "sanitize_url",
    "is_safe_url",
    "safe_html",
    "safe_style",
    "safe_url",
]
