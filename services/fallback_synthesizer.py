"""
Deterministic fallback screen used when the model output is unusable.
"""
import html
from typing import Optional

from config.settings import DEFAULT_SCREEN_NAME, FALLBACK_PROMPT_LIMIT
from models.screen import ScreenData

FALLBACK_TEMPLATE = """<div class="min-h-screen bg-gray-50 p-6">
  <div class="max-w-md mx-auto bg-white rounded-2xl shadow-lg overflow-hidden">
    <div class="bg-indigo-600 px-6 py-4">
      <h1 class="text-white text-xl font-bold">Generated Screen</h1>
    </div>
    <div class="p-6">
      <p class="text-gray-600 mb-4">Your request: &quot;{safe_prompt}&quot;</p>
      <div class="bg-gray-100 rounded-xl p-4 text-center">
        <p class="text-gray-500 text-sm">AI-generated content will appear here</p>
      </div>
      <button class="mt-4 w-full bg-indigo-600 text-white py-3 rounded-xl font-medium hover:bg-indigo-700 transition-colors">
        Action Button
      </button>
    </div>
  </div>
</div>"""


def truncate_prompt(prompt: Optional[str], limit: int = FALLBACK_PROMPT_LIMIT) -> str:
    prompt = prompt or ""
    return prompt[:limit] + "..." if len(prompt) > limit else prompt


def synthesize_fallback_html(prompt: Optional[str]) -> str:
    """Echo the (truncated, escaped) prompt inside the placeholder template."""
    safe_prompt = html.escape(truncate_prompt(prompt), quote=True)
    return FALLBACK_TEMPLATE.format(safe_prompt=safe_prompt)


def synthesize_fallback(prompt: Optional[str]) -> ScreenData:
    return ScreenData(
        name=DEFAULT_SCREEN_NAME,
        description="Generated from prompt",
        html_content=synthesize_fallback_html(prompt),
        css_content="",
        is_fallback=True,
        provenance="fallback",
    )
