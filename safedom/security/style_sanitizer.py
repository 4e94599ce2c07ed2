"""
Style Sanitizer for CSS Property Values

Validates a single CSS declaration value (what gets bound to
``[style.background]``, not a whole rule) against a conservative grammar.
Values that do not validate are replaced wholesale by the sentinel
``"unsafe"``: CSS values are positional, so keeping the valid fragments could
reassemble a different declaration.

Accepted values are made of:
    - letters, digits, spaces and ``- , . " ' % _ ! #``
    - ``property: value`` pairs joined by ``;``, for bindings that carry
      several declarations
    - transform functions (matrix, translate, scale, rotate, skew,
      perspective, optionally suffixed X, Y or 3d) and color functions
      (rgb, rgba, hsl, hsla) with plain numeric arguments
    - a single ``url(...)`` whose argument passes the URL sanitizer

The grammar only checks for XSS safety, not for CSS validity. It is checked in
a single pass over the structural characters ``: ; ( )``, so validation time
grows linearly with the length of the value.
"""

import re
import string

from safedom.core.diagnostics import report_unsafe_value

from .url_sanitizer import is_safe_url, normalize_url

UNSAFE_STYLE_VALUE = "unsafe"

# Plain value characters. Quotes are allowed here; has_balanced_quotes()
# checks they pair up.
_VALUES = re.compile(r"""[-,."'%_!# a-zA-Z0-9]*""")
_FN_ARGS = re.compile(r"[-0-9.%, a-zA-Z]+")
_KEY_CHARACTERS = frozenset(string.ascii_letters + "-")

_TRANSFORMATION_FNS = ("matrix", "translate", "scale", "rotate", "skew", "perspective")
_COLOR_FNS = ("rgb", "rgba", "hsl", "hsla")
_FUNCTION_NAMES = tuple(f"{fn}{suffix}" for fn in _TRANSFORMATION_FNS for suffix in ("", "X", "Y", "3d")) + _COLOR_FNS

# ":" ";" "(" and ")" may only appear in "key: value;" pairs and function calls
_STRUCTURE = re.compile(r"([:;()])")

# url(...) with any argument free of closing parentheses. The argument is
# checked separately with the URL sanitizer.
_URL_VALUE = re.compile(r"url\(([^)]+)\)")


def has_balanced_quotes(value: str) -> bool:
    """
    Check that single and double quotes pair up.

    A quote inside a span opened by the other kind of quote does not count,
    and a backslash escapes the character after it.

    Args:
        value: CSS value

    Returns:
        False if a quoted span is still open at the end of the value
    """
    outside_single = True
    outside_double = True
    escaped = False
    for char in value:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "'" and outside_double:
            outside_single = not outside_single
        elif char == '"' and outside_single:
            outside_double = not outside_double
    return outside_single and outside_double


def _is_valid_before(delimiter: str, previous: str, run: str) -> bool:
    """
    Check the text between two structural characters.

    Args:
        delimiter: Structural character ending the run
        previous: Structural character before the run ("" at the start)
        run: Plain value characters between the two

    Returns:
        True if ``delimiter`` may follow ``run`` in a safe value
    """
    if previous == "(":
        return delimiter == ")" and bool(_FN_ARGS.fullmatch(run))
    if delimiter == ")":
        return False
    if delimiter == ";":
        # Ends the value of a "key: value" pair or follows a function call
        return bool(run) if previous == ":" else (previous == ")" and not run)

    # After a ":", the pair's value needs at least one character of its own
    reserved = 1 if previous == ":" else 0
    if delimiter == ":":
        key = run[:-1] if run.endswith(" ") else run
        return len(key) > reserved and key[-1] in _KEY_CHARACTERS
    return any(run.endswith(name) and len(run) - len(name) >= reserved for name in _FUNCTION_NAMES)


def _matches_grammar(value: str) -> bool:
    parts = _STRUCTURE.split(value)
    runs = parts[0::2]
    delimiters = parts[1::2]
    if not all(_VALUES.fullmatch(run) for run in runs):
        return False

    previous = ""
    for delimiter, run in zip(delimiters, runs):
        if not _is_valid_before(delimiter, previous, run):
            return False
        previous = delimiter

    if previous == "(":
        return False
    if previous == ":":
        return bool(runs[-1])
    return bool(value)


def _is_safe_url_value(match: re.Match) -> bool:
    """Check the argument of a url(...) value."""
    argument = match.group(1).strip()
    if len(argument) >= 2 and argument[0] == argument[-1] and argument[0] in "\"'":
        argument = argument[1:-1]

    # CSS escapes (\6a avascript) could spell a scheme the URL check never sees
    if not argument or "\\" in argument:
        return False
    return normalize_url(argument) == argument and is_safe_url(argument)


def is_safe_style_value(value: str) -> bool:
    """
    Check one style value (or one ``;``-separated segment) against the grammar.

    Args:
        value: Trimmed CSS value

    Returns:
        True if the value is a safe url(...) or matches the safe-value grammar,
        with balanced quotes either way
    """
    url_match = _URL_VALUE.fullmatch(value)
    if url_match:
        return _is_safe_url_value(url_match) and has_balanced_quotes(value)
    return _matches_grammar(value) and has_balanced_quotes(value)


def are_style_segments_safe(value: str) -> bool:
    """
    Validate a value declaration by declaration.

    Splits on ``;`` and checks every non-empty segment with
    is_safe_style_value(). Used when the value as a whole does not match.

    Args:
        value: Trimmed CSS value

    Returns:
        True if there is at least one segment and all segments are safe
    """
    segments = [segment.strip() for segment in value.split(";")]
    segments = [segment for segment in segments if segment]
    return bool(segments) and all(is_safe_style_value(segment) for segment in segments)


def sanitize_style(value: str) -> str:
    """
    Sanitize a CSS property value.

    Args:
        value: Untrusted style value

    Returns:
        The trimmed value if safe, otherwise ``"unsafe"``

    Example:
        >>> sanitize_style("background: red; color: blue;")
        'background: red; color: blue;'
        >>> sanitize_style("url(javascript:evil())")
        'unsafe'
    """
    value = value.strip()
    if not value:
        return ""

    if is_safe_style_value(value):
        return value

    if ";" in value and are_style_segments_safe(value):
        return value

    report_unsafe_value("style", value, f"Sanitizing unsafe style value {value}")
    return UNSAFE_STYLE_VALUE
