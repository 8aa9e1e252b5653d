"""
Builds the isolated document a screen is previewed in.
"""
import html
from typing import Any, Dict

PREVIEW_DOCUMENT = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <script src="https://cdn.tailwindcss.com"></script>
  <style>
    * {{ margin: 0; padding: 0; box-sizing: border-box; }}
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; overflow-y: auto; height: 100vh; }}
    {css}
  </style>
</head>
<body>
{body}
</body>
</html>"""

# Generated markup is untrusted: no scripts except the Tailwind CDN, no forms, no framing
PREVIEW_CSP = (
    "default-src 'none'; "
    "script-src https://cdn.tailwindcss.com; "
    "style-src 'unsafe-inline' https:; "
    "img-src https: data:; "
    "font-src https: data:; "
    "sandbox allow-scripts"
)


def _close_style(css: str) -> str:
    # A literal </style> in the CSS would end the style element early
    return css.replace("</style", "<\\/style")


def build_preview_document(screen: Dict[str, Any]) -> str:
    return PREVIEW_DOCUMENT.format(
        title=html.escape(screen.get("name") or "Mobile Preview"),
        css=_close_style(screen.get("css_content") or ""),
        body=screen.get("html_content") or "",
    )
