"""Rendering contexts a value can be sanitized for."""

from enum import Enum


class SecurityContext(Enum):
    """Closed set of DOM contexts, each with its own sanitizer and SafeValue type."""

    HTML = "html"
    STYLE = "style"
    URL = "url"
    RESOURCE_URL = "resource url"

    def __str__(self) -> str:
        return self.value
