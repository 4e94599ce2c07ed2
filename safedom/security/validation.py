"""
Exceptions for the Sanitization Layer

Defines the exceptions raised when a caller hands a value to the wrong
security context. Values judged unsafe never raise; they are replaced by a
sentinel or stripped by the matching sanitizer.
"""

from .contexts import SecurityContext


class ValidationError(Exception):
    """
    Base class for errors raised by the sanitization layer.

    These indicate a programming error in the caller, never attacker input,
    and must propagate instead of being downgraded to a warning.
    """

    pass


class UnsupportedContextError(ValidationError):
    """
    Raised when a value cannot be used in the requested security context.

    Happens when a SafeValue trusted for one context is bound to another, or
    when anything other than a SafeResourceUrl is bound to a resource URL.

    Attributes:
        expected: Context the value was bound to
        actual: Context the value was trusted for (None for plain values)
    """

    def __init__(self, message: str, expected: SecurityContext, actual: SecurityContext | None = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
