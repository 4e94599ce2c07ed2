"""
Trusted Value Wrappers

A SafeValue tags a string as pre-approved for exactly one SecurityContext.
Instances are created only through the ``bypass_security_trust_*`` methods of
DomSanitizationService; the sanitizers hand their payload through untouched
when the value is bound to its own context, and reject it everywhere else.

The wrappers carry no behavior beyond identity and unwrapping.
"""

from typing import Any, ClassVar

from .contexts import SecurityContext
from .validation import UnsupportedContextError


class SafeValue:
    """
    A string the caller has asserted to be safe for one security context.

    The payload is exposed as ``changing_this_will_bypass_security_trust`` so
    that security reviews can grep for every place trust is asserted or read.
    """

    __slots__ = ("_trusted_content",)

    context: ClassVar[SecurityContext]

    def __init__(self, value: str):
        if type(self) is SafeValue:
            raise TypeError("SafeValue is abstract, use one of its context variants")
        object.__setattr__(self, "_trusted_content", value)

    @property
    def changing_this_will_bypass_security_trust(self) -> str:
        return self._trusted_content

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return self._trusted_content

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._trusted_content!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SafeValue):
            return NotImplemented
        return type(self) is type(other) and self._trusted_content == other._trusted_content

    def __hash__(self) -> int:
        return hash((type(self), self._trusted_content))


class SafeHtml(SafeValue):
    """HTML markup trusted to be rendered as-is."""

    __slots__ = ()
    context = SecurityContext.HTML


class SafeStyle(SafeValue):
    """CSS style value trusted to be bound as-is."""

    __slots__ = ()
    context = SecurityContext.STYLE


class SafeUrl(SafeValue):
    """URL trusted for hyperlinks and other navigational attributes."""

    __slots__ = ()
    context = SecurityContext.URL


class SafeResourceUrl(SafeValue):
    """URL trusted to load executable code (script, stylesheet or frame source)."""

    __slots__ = ()
    context = SecurityContext.RESOURCE_URL


SAFE_VALUE_TYPES: dict[SecurityContext, type[SafeValue]] = {
    SecurityContext.HTML: SafeHtml,
    SecurityContext.STYLE: SafeStyle,
    SecurityContext.URL: SafeUrl,
    SecurityContext.RESOURCE_URL: SafeResourceUrl,
}


def unwrap_safe_value(value: SafeValue, context: SecurityContext) -> str:
    """
    Return the trusted payload of a SafeValue bound to ``context``.

    Args:
        value: Trusted value being bound
        context: Context the value is bound to

    Returns:
        The payload, verbatim

    Raises:
        UnsupportedContextError: If the value was trusted for another context
    """
    if value.context is not context:
        raise UnsupportedContextError(
            f"Unexpected SecurityContext {value.context}, expecting {context}",
            expected=context,
            actual=value.context,
        )
    return value.changing_this_will_bypass_security_trust
