"""
Tests for the safedom command line

Run with:
    pytest tests/test_cli.py -v
"""

import io

import pytest

from safedom.cli import main, parse_arguments


class TestParseArguments:
    """Tests for argument parsing"""

    def test_defaults(self):
        """Test positional arguments and default flags"""
        args = parse_arguments(["url", "https://example.com"])

        assert args.context == "url"
        assert args.value == "https://example.com"
        assert args.trust is False
        assert args.dev_mode is False

    def test_flags_between_context_and_value(self):
        """Test that flags may appear before the value"""
        args = parse_arguments(["resource-url", "--trust", "https://cdn.example.com/app.js"])

        assert args.context == "resource-url"
        assert args.value == "https://cdn.example.com/app.js"
        assert args.trust is True

    def test_value_omitted(self):
        """Test that the value is optional so it can come from stdin"""
        args = parse_arguments(["html", "--dev-mode"])

        assert args.value is None
        assert args.dev_mode is True

    def test_unknown_context(self):
        """Test that unknown contexts are rejected by argparse"""
        with pytest.raises(SystemExit):
            parse_arguments(["script", "x"])


class TestMain:
    """Tests for main()"""

    def test_unsafe_url(self, capsys):
        """Test that an unsafe URL is printed with the unsafe: prefix"""
        assert main(["url", "javascript:alert(1)"]) == 0
        assert capsys.readouterr().out == "unsafe:javascript:alert(1)\n"

    def test_html_from_stdin(self, monkeypatch, capsys):
        """Test that the value is read from stdin when not given"""
        monkeypatch.setattr("sys.stdin", io.StringIO('<b onclick="x()">hi</b>\n'))

        assert main(["html"]) == 0
        assert capsys.readouterr().out == "<b>hi</b>\n"

    def test_style(self, capsys):
        """Test the style context"""
        assert main(["style", "url(javascript:evil())"]) == 0
        assert capsys.readouterr().out == "unsafe\n"

    def test_resource_url_rejected(self, capsys):
        """Test that a plain resource URL exits with code 2"""
        assert main(["resource-url", "https://cdn.example.com/app.js"]) == 2

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Security violation in resource url" in captured.err

    def test_trusted_resource_url(self, capsys):
        """Test that --trust passes the value through verbatim"""
        assert main(["resource-url", "--trust", "https://cdn.example.com/app.js"]) == 0
        assert capsys.readouterr().out == "https://cdn.example.com/app.js\n"

    def test_trusted_url_not_rewritten(self, capsys):
        """Test that a trusted javascript: URL is not prefixed"""
        assert main(["url", "--trust", "javascript:void(0)"]) == 0
        assert capsys.readouterr().out == "javascript:void(0)\n"

    def test_dev_mode_reports_on_stderr(self, capsys):
        """Test that --dev-mode logs the diagnostic to stderr"""
        assert main(["url", "--dev-mode", "javascript:x"]) == 0

        captured = capsys.readouterr()
        assert captured.out == "unsafe:javascript:x\n"
        assert "g.co/ng/security#xss" in captured.err

    def test_invalid_configuration(self, monkeypatch, capsys):
        """Test that invalid configuration exits with code 1"""
        monkeypatch.setenv("SAFEDOM_DEV_MODE", "maybe")

        assert main(["url", "x"]) == 1
        assert "SAFEDOM_DEV_MODE" in capsys.readouterr().err
