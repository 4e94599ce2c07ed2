"""
Integration Test Suite for Context Sanitization

Tests combining the service, the sanitizers and the trusted-value wrappers the
way a template binding layer would use them.

Run with:
    pytest tests/security/test_integration.py -v
"""

import pytest
from bs4 import BeautifulSoup

from safedom.core.diagnostics import set_dev_mode
from safedom.security import (
    DomSanitizationService,
    SecurityContext,
    UnsupportedContextError,
    safe_html,
    safe_style,
    safe_url,
)


class TestIntegration:
    """Integration tests combining multiple sanitizers"""

    def test_render_user_profile(self, service):
        """Test a profile card built from untrusted fields"""
        bio = '<p>Hi <b>there</b></p><img src="x" onerror="steal()"><script>steal()</script>'
        homepage = "javascript:steal()"
        accent = "color: red; background: url(javascript:steal())"

        card = (
            f'<div style="{service.sanitize(SecurityContext.STYLE, accent)}">'
            f'<a href="{service.sanitize(SecurityContext.URL, homepage)}">home</a>'
            f"{service.sanitize(SecurityContext.HTML, bio)}</div>"
        )
        soup = BeautifulSoup(card, "html.parser")

        assert soup.find("script") is None
        assert soup.find("img").attrs == {"src": "x"}
        assert soup.find("a")["href"] == "unsafe:javascript:steal()"
        assert soup.find("div")["style"] == "unsafe"

    def test_trusted_embed_code(self, service):
        """Test that a reviewed embed snippet survives only where it is trusted"""
        snippet = '<script src="https://widgets.example.com/embed.js"></script>'
        trusted = service.bypass_security_trust_html(snippet)

        assert service.sanitize(SecurityContext.HTML, trusted) == snippet
        assert service.sanitize(SecurityContext.HTML, snippet) == ""
        with pytest.raises(UnsupportedContextError):
            service.sanitize(SecurityContext.RESOURCE_URL, trusted)

    def test_script_source_requires_resource_url(self, service):
        """Test that a script src must be trusted as a resource URL"""
        src = "https://cdn.example.com/app.js"

        with pytest.raises(UnsupportedContextError):
            service.sanitize(SecurityContext.RESOURCE_URL, src)

        trusted = service.bypass_security_trust_resource_url(src)
        assert service.sanitize(SecurityContext.RESOURCE_URL, trusted) == src

    def test_convenience_functions(self):
        """Test the module-level shortcuts"""
        assert safe_html("ha <script>evil()</script>") == "ha "
        assert safe_style("url(javascript:evil())") == "unsafe"
        assert safe_url("javascript:alert(1)") == "unsafe:javascript:alert(1)"
        assert safe_url(None) is None

    def test_convenience_functions_honor_trust(self):
        """Test that the shortcuts pass trusted values through"""
        service = DomSanitizationService()
        assert safe_url(service.bypass_security_trust_url("javascript:void(0)")) == "javascript:void(0)"

    def test_diagnostics_across_contexts(self, service, collected_diagnostics):
        """Test that every rejecting context reports once in dev mode"""
        service.sanitize(SecurityContext.HTML, "<script>x</script>")
        service.sanitize(SecurityContext.STYLE, "expression(x)")
        service.sanitize(SecurityContext.URL, "javascript:x")
        service.sanitize(SecurityContext.URL, "https://example.com")

        assert [d.context for d in collected_diagnostics] == ["html", "style", "url"]
        assert all("g.co/ng/security#xss" in d.message for d in collected_diagnostics)

    def test_diagnostics_do_not_change_results(self, service, collected_diagnostics):
        """Test that dev mode has no effect on returned values"""
        value = "javascript:alert(1)"
        with_dev_mode = service.sanitize(SecurityContext.URL, value)

        set_dev_mode(False)
        assert service.sanitize(SecurityContext.URL, value) == with_dev_mode
