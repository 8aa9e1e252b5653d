"""Tests for the deterministic fallback screen."""
import pytest

from services.fallback_synthesizer import synthesize_fallback, truncate_prompt


class TestFallbackSynthesizer:

    def test_prompt_is_echoed(self):
        screen_data = synthesize_fallback("a login screen")
        assert "a login screen" in screen_data.html_content
        assert screen_data.is_fallback is True
        assert screen_data.provenance == "fallback"
        assert screen_data.name == "Generated Screen"

    def test_long_prompt_is_truncated(self):
        prompt = "x" * 250
        screen_data = synthesize_fallback(prompt)
        assert ("x" * 100 + "...") in screen_data.html_content
        assert ("x" * 101) not in screen_data.html_content

    def test_prompt_at_limit_is_not_truncated(self):
        assert truncate_prompt("y" * 100) == "y" * 100

    def test_markup_in_prompt_is_escaped(self):
        screen_data = synthesize_fallback('<script>alert("x")</script>')
        assert "<script>" not in screen_data.html_content
        assert "&lt;script&gt;" in screen_data.html_content

    @pytest.mark.parametrize("prompt", ["", None, "{}", "{prompt}", "éè \U0001F600", "a" * 10000])
    def test_never_raises_and_always_has_html(self, prompt):
        screen_data = synthesize_fallback(prompt)
        assert screen_data.html_content.strip()
        assert screen_data.css_content == ""

    def test_deterministic(self):
        assert synthesize_fallback("same") == synthesize_fallback("same")
