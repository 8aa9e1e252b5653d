"""Tests for recovering screen data from raw model output."""
import json

import pytest

from services.response_extractor import (
    extract_screen_data,
    parse_braced_span,
    parse_fenced_block,
    parse_whole_text,
    recover_fields,
    scrape_markup,
)

LOGIN_RECORD = {
    "name": "Login",
    "description": "Email and password sign-in",
    "htmlContent": '<div class="p-6"><button class="rounded-xl">Sign in</button></div>',
    "cssContent": ".p-6 { padding: 1.5rem; }",
}


def _assert_matches(screen_data, record):
    assert screen_data is not None
    assert screen_data.name == record["name"]
    assert screen_data.description == record["description"]
    assert screen_data.html_content == record["htmlContent"]
    assert screen_data.css_content == record["cssContent"]


class TestStrategies:

    def test_whole_text_is_json(self):
        _assert_matches(extract_screen_data(json.dumps(LOGIN_RECORD)), LOGIN_RECORD)

    def test_example_login_response(self):
        raw = '{"name":"Login","description":"","htmlContent":"<div>Login</div>","cssContent":""}'
        screen_data = extract_screen_data(raw)
        assert screen_data.name == "Login"
        assert screen_data.html_content == "<div>Login</div>"
        assert screen_data.is_fallback is False

    @pytest.mark.parametrize("fence", ["```json\n{}\n```", "```\n{}\n```", "```JSON {} ```"])
    def test_fenced_block_matches_unwrapped_text(self, fence):
        inner = json.dumps(LOGIN_RECORD)
        wrapped = "Here is your screen:\n" + fence.replace("{}", inner) + "\nEnjoy!"

        assert parse_whole_text(wrapped) is None
        assert parse_fenced_block(wrapped) == parse_whole_text(inner)
        _assert_matches(extract_screen_data(wrapped), LOGIN_RECORD)

    def test_braced_span_inside_prose(self):
        raw = "Sure! " + json.dumps(LOGIN_RECORD) + " Let me know if you want changes."
        assert parse_fenced_block(raw) is None
        _assert_matches(parse_braced_span(raw), LOGIN_RECORD)
        _assert_matches(extract_screen_data(raw), LOGIN_RECORD)

    def test_field_recovery_from_broken_json(self):
        # Trailing comma and missing closing brace: not parseable as JSON
        raw = '{"name": "Profile", "htmlContent": "<div class=\\"card\\">Hi</div>", "cssContent": "",'
        screen_data = extract_screen_data(raw)
        assert screen_data.name == "Profile"
        assert screen_data.html_content == '<div class="card">Hi</div>'
        assert screen_data.description == ""
        assert screen_data.css_content == ""

    def test_field_recovery_with_unescaped_quotes_in_html(self):
        raw = '{"name": "Cart", "htmlContent": "<div class="cart">Items</div>", "description": "Shopping cart"}'
        screen_data = recover_fields(raw)
        assert screen_data.name == "Cart"
        assert screen_data.html_content == '<div class="cart">Items</div>'
        assert screen_data.description == "Shopping cart"

    def test_field_recovery_decodes_newlines(self):
        raw = '{"name": "Feed", "htmlContent": "<ul>\\n<li>One</li>\\n</ul>"}}'
        screen_data = recover_fields(raw)
        assert screen_data.html_content == "<ul>\n<li>One</li>\n</ul>"

    def test_snake_case_keys_accepted(self):
        raw = json.dumps({"name": "Home", "html_content": "<main>Home</main>", "css_content": "main{}"})
        screen_data = extract_screen_data(raw)
        assert screen_data.html_content == "<main>Home</main>"
        assert screen_data.css_content == "main{}"


class TestNoMatch:

    @pytest.mark.parametrize("raw", [
        "",
        "I am sorry, I cannot help with that.",
        "The screen should have a header and a login button.",
        '{"title": "not a screen"}',
        "[1, 2, 3]",
        '"just a string"',
    ])
    def test_unstructured_text(self, raw):
        assert extract_screen_data(raw) is None

    def test_name_without_html_is_not_a_match(self):
        assert extract_screen_data('"name": "Login", "description": "no markup here"') is None

    def test_empty_html_is_not_a_match(self):
        raw = json.dumps({"name": "Login", "description": "", "htmlContent": "", "cssContent": ""})
        assert extract_screen_data(raw) is None

    def test_non_string_html_is_not_a_match(self):
        raw = json.dumps({"name": "Login", "htmlContent": None})
        assert extract_screen_data(raw) is None

    def test_none_input(self):
        assert extract_screen_data(None) is None

    def test_deeply_nested_json_is_not_a_match(self):
        assert extract_screen_data("[" * 100000) is None


class TestScrapeMarkup:

    def test_markup_span_without_prose(self):
        raw = 'Here you go: <div class="p-4"><p>Hello</p></div> hope it helps'
        assert scrape_markup(raw) == '<div class="p-4"><p>Hello</p></div>'

    def test_no_angle_brackets(self):
        assert scrape_markup("no markup at all") is None
        assert scrape_markup("") is None
