"""
DOM Sanitization Service

Single entry point used by template bindings: given a value and the security
context of the binding target, either hand a trusted value through, sanitize a
plain value, or reject the binding.

    sanitize(context, value)
        None                          -> None, no sanitizer runs
        SafeValue for ``context``     -> payload verbatim
        SafeValue for another context -> UnsupportedContextError
        anything else                 -> str(value) through the context's sanitizer

RESOURCE_URL has no sanitizer: only a SafeResourceUrl is accepted, because a
resource URL can load and execute arbitrary code.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .contexts import SecurityContext
from .html_sanitizer import sanitize_html
from .safe_values import SafeHtml, SafeResourceUrl, SafeStyle, SafeUrl, SafeValue, unwrap_safe_value
from .style_sanitizer import sanitize_style
from .url_sanitizer import sanitize_url
from .validation import UnsupportedContextError


class SanitizationService(ABC):
    """Interface the template binding layer depends on."""

    __slots__ = ()

    @abstractmethod
    def sanitize_html(self, value: Any) -> str | None:
        pass

    @abstractmethod
    def sanitize_style(self, value: Any) -> str | None:
        pass

    @abstractmethod
    def sanitize_url(self, value: Any) -> str | None:
        pass

    @abstractmethod
    def sanitize_resource_url(self, value: Any) -> str | None:
        pass


def _unwrap_or_sanitize(context: SecurityContext, value: Any, sanitizer: Callable[[str], str]) -> str | None:
    if value is None:
        return None
    if isinstance(value, SafeValue):
        return unwrap_safe_value(value, context)
    return sanitizer(value if isinstance(value, str) else str(value))


class DomSanitizationService(SanitizationService):
    """
    Sanitizes values for the different DOM contexts to prevent XSS.

    For example, when binding a URL in ``<a [href]="some_url">``, ``some_url``
    is sanitized so that an attacker cannot inject a ``javascript:`` URL.

    When the application genuinely needs an unsanitized value (a dynamic
    ``javascript:`` link, markup with scripts), it can wrap it with one of the
    ``bypass_security_trust_*`` methods and bind the wrapper instead. Do this
    as early and as close to the source of the value as possible, so reviews
    can verify that no XSS is introduced. Values that are already safe do not
    need bypassing; the sanitizers leave them intact.

    The service has no state. Every construction returns the same shared
    instance, and any instance behaves exactly like any other.

    Usage:
        service = DomSanitizationService()
        service.sanitize(SecurityContext.URL, "javascript:alert(1)")
        # 'unsafe:javascript:alert(1)'

        trusted = service.bypass_security_trust_url("javascript:void(0)")
        service.sanitize(SecurityContext.URL, trusted)
        # 'javascript:void(0)'
    """

    __slots__ = ()

    def __new__(cls):
        instance = cls.__dict__.get("_instance")
        if instance is None:
            instance = super().__new__(cls)
            cls._instance = instance
        return instance

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def sanitize(self, context: SecurityContext | str, value: Any) -> str | None:
        """
        Make ``value`` safe for ``context``.

        Args:
            context: SecurityContext (or its value, e.g. "html")
            value: Plain value, SafeValue or None

        Returns:
            Trusted payload, sanitized string, or None for None

        Raises:
            UnsupportedContextError: If a SafeValue is bound to the wrong context,
                or a non-SafeResourceUrl is bound to RESOURCE_URL
            ValueError: If ``context`` is not a known security context
        """
        context = SecurityContext(context)
        if context is SecurityContext.HTML:
            return self.sanitize_html(value)
        if context is SecurityContext.STYLE:
            return self.sanitize_style(value)
        if context is SecurityContext.URL:
            return self.sanitize_url(value)
        return self.sanitize_resource_url(value)

    def sanitize_html(self, value: Any) -> str | None:
        return _unwrap_or_sanitize(SecurityContext.HTML, value, sanitize_html)

    def sanitize_style(self, value: Any) -> str | None:
        return _unwrap_or_sanitize(SecurityContext.STYLE, value, sanitize_style)

    def sanitize_url(self, value: Any) -> str | None:
        return _unwrap_or_sanitize(SecurityContext.URL, value, sanitize_url)

    def sanitize_resource_url(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, SafeValue):
            return unwrap_safe_value(value, SecurityContext.RESOURCE_URL)
        raise UnsupportedContextError(
            "Security violation in resource url. Create SafeValue",
            expected=SecurityContext.RESOURCE_URL,
        )

    def bypass_security_trust_html(self, value: str | None) -> SafeHtml:
        """
        Trust the given value to be safe HTML.

        Only use this when the bound HTML is unsafe (e.g. contains ``<script>``)
        and the code should run. Safe HTML is left intact by the sanitizer.

        WARNING: calling this with untrusted user data causes severe security bugs!
        """
        return SafeHtml(value or "")

    def bypass_security_trust_style(self, value: str | None) -> SafeStyle:
        """
        Trust the given value to be a safe style value (CSS).

        WARNING: calling this with untrusted user data causes severe security bugs!
        """
        return SafeStyle(value or "")

    def bypass_security_trust_url(self, value: str | None) -> SafeUrl:
        """
        Trust the given value to be a safe URL for hyperlinks or ``<img src>``.

        WARNING: calling this with untrusted user data causes severe security bugs!
        """
        return SafeUrl(value or "")

    def bypass_security_trust_resource_url(self, value: str | None) -> SafeResourceUrl:
        """
        Trust the given value to be a safe resource URL, i.e. a location code
        may be loaded from, like ``<script src>`` or ``<iframe src>``.

        WARNING: calling this with untrusted user data causes severe security bugs!
        """
        return SafeResourceUrl(value or "")

    def bypass_security_trust(self, context: SecurityContext | str, value: str | None) -> SafeValue:
        """Trust ``value`` for ``context``; dispatches to the bypass method of that context."""
        context = SecurityContext(context)
        if context is SecurityContext.HTML:
            return self.bypass_security_trust_html(value)
        if context is SecurityContext.STYLE:
            return self.bypass_security_trust_style(value)
        if context is SecurityContext.URL:
            return self.bypass_security_trust_url(value)
        return self.bypass_security_trust_resource_url(value)
