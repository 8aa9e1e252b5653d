"""
Recovery of structured screen data from raw model output.

The model is asked for a bare JSON object but does not always comply: it may
wrap the object in a markdown fence, surround it with prose, or emit JSON that
does not parse. Each strategy below takes the raw text and returns a
ScreenData or None; they are tried in order and the first match wins.
"""
import json
import logging
import re
from typing import Any, Callable, List, Optional

from models.screen import ScreenData

logger = logging.getLogger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?\s*```", re.IGNORECASE)
BRACED_PATTERN = re.compile(r"\{[\s\S]*\}")
MARKUP_PATTERN = re.compile(r"<[\s\S]*>")

# Escape-aware string values
NAME_PATTERN = re.compile(r'"name"\s*:\s*"((?:[^"\\]|\\.)*)"')
DESCRIPTION_PATTERN = re.compile(r'"description"\s*:\s*"((?:[^"\\]|\\.)*)"')
CSS_PATTERN = re.compile(r'"cssContent"\s*:\s*"((?:[^"\\]|\\.)*)"')
# HTML often carries unescaped quotes, so read up to the next key or closing brace
HTML_PATTERN = re.compile(r'"htmlContent"\s*:\s*"([\s\S]*?)"(?:,\s*"|\s*\})')

_SIMPLE_ESCAPES = {'\\"': '"', "\\n": "\n", "\\t": "\t", "\\/": "/", "\\\\": "\\"}


def _decode_json_string(value: str) -> str:
    """Decode JSON string escapes, tolerating values that are not valid JSON."""
    try:
        return json.loads(f"\"{value}\"", strict=False)
    except ValueError:
        return re.sub(r'\\["ntr/\\]', lambda m: _SIMPLE_ESCAPES.get(m.group(0), ""), value)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _record_to_screen(record: Any) -> Optional[ScreenData]:
    """Accept a parsed JSON value only if it is an object with HTML content."""
    if not isinstance(record, dict):
        return None

    html_content = _as_text(record.get("htmlContent", record.get("html_content")))
    if not html_content.strip():
        return None

    return ScreenData(
        name=_as_text(record.get("name")),
        description=_as_text(record.get("description")),
        html_content=html_content,
        css_content=_as_text(record.get("cssContent", record.get("css_content"))),
    )


def _parse_record(text: str) -> Optional[ScreenData]:
    try:
        return _record_to_screen(json.loads(text))
    except (ValueError, RecursionError):
        return None


def parse_whole_text(raw_text: str) -> Optional[ScreenData]:
    return _parse_record(raw_text.strip())


def parse_fenced_block(raw_text: str) -> Optional[ScreenData]:
    match = FENCED_BLOCK_PATTERN.search(raw_text)
    if not match:
        return None
    return _parse_record(match.group(1).strip())


def parse_braced_span(raw_text: str) -> Optional[ScreenData]:
    match = BRACED_PATTERN.search(raw_text)
    if not match:
        return None
    return _parse_record(match.group(0))


def recover_fields(raw_text: str) -> Optional[ScreenData]:
    """
    Pick the fields out one by one. `name` and `htmlContent` are required;
    `description` and `cssContent` default to empty strings.
    """
    name_match = NAME_PATTERN.search(raw_text)
    html_match = HTML_PATTERN.search(raw_text)
    if not name_match or not html_match:
        return None

    html_content = _decode_json_string(html_match.group(1))
    if not html_content.strip():
        return None

    description_match = DESCRIPTION_PATTERN.search(raw_text)
    css_match = CSS_PATTERN.search(raw_text)

    return ScreenData(
        name=_decode_json_string(name_match.group(1)),
        description=_decode_json_string(description_match.group(1)) if description_match else "",
        html_content=html_content,
        css_content=_decode_json_string(css_match.group(1)) if css_match else "",
    )


# Priority order matters: cheapest and most trustworthy first
EXTRACTION_STRATEGIES: List[Callable[[str], Optional[ScreenData]]] = [
    parse_whole_text,
    parse_fenced_block,
    parse_braced_span,
    recover_fields,
]


def extract_screen_data(raw_text: str) -> Optional[ScreenData]:
    """
    Run the extraction strategies in order and return the first match,
    or None when none of them recovers a usable record.
    """
    if not raw_text or not isinstance(raw_text, str):
        return None

    for strategy in EXTRACTION_STRATEGIES:
        screen_data = strategy(raw_text)
        if screen_data is not None:
            logger.debug(f"Extracted screen data with strategy '{strategy.__name__}'")
            return screen_data

    logger.debug("No extraction strategy matched the model response")
    return None


def scrape_markup(raw_text: str, limit: int = 5) -> Optional[str]:
    """
    Last resort: keep the markup spans found in the text. The pattern is greedy,
    so a response with one block of HTML yields that whole block, prose trimmed.
    """
    if not raw_text:
        return None
    spans: List[str] = MARKUP_PATTERN.findall(raw_text)
    if not spans:
        return None
    return "\n".join(spans[:limit])
