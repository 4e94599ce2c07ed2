"""
HTML Sanitizer for Markup Bindings

Sanitizes an HTML fragment bound as markup (``[innerHtml]``). The fragment is
parsed with BeautifulSoup, cleaned against the allow-lists in html_policy and
serialized again:

    - script, style and other executable containers are removed with their content
    - elements outside the allow-list are unwrapped (their children stay)
    - event handlers, non-allow-listed attributes (``srcdoc``, ``style``, ...)
      and URL attributes that fail the URL sanitizer are dropped
    - comments, doctypes and processing instructions are removed
    - optional end tags a browser would imply (``<p>a<p>b``) are closed

Text keeps its meaning but not its spelling: entities are decoded by the
parser, then ``&``, ``<`` and ``>`` are escaped by name and every non-ASCII
character as a numeric reference (``a&nbsp;b`` becomes ``a&#160;b``).

Unsafe markup degrades by omission; there is no sentinel for HTML.
"""

import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import PreformattedString
from bs4.formatter import HTMLFormatter

from safedom.core.diagnostics import report_unsafe_value
from safedom.core.logging_config import get_logger

from .html_policy import DEFAULT_POLICY, IMPLIED_END_TAGS, HtmlSanitizationPolicy
from .url_sanitizer import is_safe_srcset, is_safe_url

logger = get_logger(__name__)

# Fragments such as "index.html" are markup here, not file names
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_NON_ASCII = re.compile(r"[^\x00-\x7e]")


def substitute_entities(value: str) -> str:
    """Escape &, < and > by name and every non-ASCII character by code point."""
    value = EntitySubstitution.substitute_xml(value)
    return _NON_ASCII.sub(lambda match: f"&#{ord(match.group())};", value)


class SourceOrderFormatter(HTMLFormatter):
    """HTMLFormatter that keeps attributes in source order instead of sorting them."""

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return [
            (name, None if self.empty_attributes_are_booleans and value == "" else value)
            for name, value in tag.attrs.items()
        ]


# HTML5 void elements (<img>, not <img/>)
HTML_FORMATTER = SourceOrderFormatter(
    entity_substitution=substitute_entities,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)


class HtmlSanitizer:
    """
    Walks a parsed fragment and removes everything the policy does not allow.

    Instances hold only the (immutable) policy and can be shared freely.
    """

    def __init__(self, policy: HtmlSanitizationPolicy = DEFAULT_POLICY):
        self.policy = policy

    def sanitize(self, html: str) -> str:
        """
        Sanitize an HTML fragment.

        Parsing and serializing is repeated until the output is stable, so
        markup that only appears after a re-parse is sanitized too.

        Args:
            html: Untrusted HTML fragment

        Returns:
            Sanitized HTML (empty if the fragment never stabilizes)
        """
        if not html:
            return ""

        current = html
        stripped = False
        for _ in range(self.policy.max_passes):
            soup = BeautifulSoup(current, "html.parser", multi_valued_attributes=None)
            stripped = self._clean(soup) or stripped
            sanitized = soup.decode(formatter=HTML_FORMATTER)
            if sanitized == current:
                break
            current = sanitized
        else:
            logger.debug("HTML did not stabilize after %d passes", self.policy.max_passes)
            report_unsafe_value("html", html, "Dropping HTML that changes on every sanitization pass")
            return ""

        if stripped:
            report_unsafe_value("html", html, "WARNING: sanitizing HTML stripped some content")
        return current

    def _clean(self, soup: BeautifulSoup) -> bool:
        """Clean the tree in place. Returns True if anything was removed."""
        _close_implied_end_tags(soup)
        stripped = False

        # Comments, doctypes, CDATA, declarations and processing instructions
        for node in list(soup.descendants):
            if isinstance(node, PreformattedString):
                node.extract()
                stripped = True

        for tag in soup.find_all(True):
            if tag.decomposed:
                continue
            if self.policy.drops_content(tag.name):
                tag.decompose()
                stripped = True
            elif not self.policy.is_element_allowed(tag.name):
                tag.unwrap()
                stripped = True
            else:
                stripped = self._clean_attributes(tag) or stripped

        return stripped

    def _clean_attributes(self, tag: Tag) -> bool:
        removed = False
        for name, value in list(tag.attrs.items()):
            if not self._is_attribute_safe(name, value):
                del tag.attrs[name]
                removed = True
        return removed

    def _is_attribute_safe(self, name: str, value: str) -> bool:
        if not self.policy.is_attribute_allowed(name):
            return False
        name = name.lower()
        if name in self.policy.url_attributes:
            return is_safe_url(value)
        if name in self.policy.srcset_attributes:
            return is_safe_srcset(value)
        return True


def _close_implied_end_tags(soup: BeautifulSoup) -> None:
    """
    Move children that would have closed their parent out after it.

    html.parser keeps "<li>a<li>b" as nested items; browsers end the first
    item when the second starts. Only direct children are considered; innermost
    elements go first so a moved child is not left nested in its grandparent.
    """
    for tag in reversed(soup.find_all(list(IMPLIED_END_TAGS))):
        closers = IMPLIED_END_TAGS[tag.name]
        closing_child = next(
            (child for child in tag.children if isinstance(child, Tag) and child.name in closers),
            None,
        )
        if closing_child is None:
            continue

        anchor = tag
        for node in [closing_child, *closing_child.next_siblings]:
            anchor.insert_after(node.extract())
            anchor = node


_default_sanitizer = HtmlSanitizer()


def sanitize_html(html: str, policy: HtmlSanitizationPolicy | None = None) -> str:
    """
    Sanitize an HTML fragment.

    Args:
        html: Untrusted HTML fragment
        policy: Allow-lists to apply (defaults to DEFAULT_POLICY)

    Returns:
        Sanitized HTML

    Example:
        >>> sanitize_html('also <img src="x" onerror="evil()"> evil')
        'also <img src="x"> evil'
    """
    sanitizer = _default_sanitizer if policy is None else HtmlSanitizer(policy)
    return sanitizer.sanitize(html)
