"""
Prompt-to-screen generation with layered recovery.

generate() always returns renderable content: the model's JSON when it can be
recovered, scraped markup when only HTML can be found, and the deterministic
fallback screen otherwise (including when the model call itself fails).
"""
import logging

from config.settings import DEFAULT_SCREEN_NAME
from models.screen import ScreenData
from prompts.screen_prompts import create_screen_prompt
from services.fallback_synthesizer import synthesize_fallback
from services.llm_service import LLMService
from services.response_extractor import extract_screen_data, scrape_markup

logger = logging.getLogger(__name__)


class ScreenGenerator:
    def __init__(self, llm: LLMService):
        self.llm = llm

    async def generate(self, project_name: str, user_prompt: str) -> ScreenData:
        full_prompt = create_screen_prompt(project_name, user_prompt)

        try:
            raw_text = await self.llm.complete(full_prompt)
        except Exception as e:
            # No retry: one model call per request
            logger.error(f"Model call failed, using fallback screen: {str(e)}")
            return synthesize_fallback(user_prompt)

        try:
            return self._recover(raw_text, user_prompt)
        except Exception as e:
            logger.error(f"Unexpected error recovering model output: {str(e)}", exc_info=True)
            return synthesize_fallback(user_prompt)

    def _recover(self, raw_text: str, user_prompt: str) -> ScreenData:
        screen_data = extract_screen_data(raw_text)
        if screen_data is not None:
            return screen_data.model_copy(update={
                "name": screen_data.name or DEFAULT_SCREEN_NAME,
                "description": screen_data.description or "",
                "css_content": screen_data.css_content or "",
                "is_fallback": False,
                "provenance": "model",
            })

        markup = scrape_markup(raw_text)
        if markup:
            logger.warning("Model response was not JSON; using scraped markup")
            return ScreenData(
                name=DEFAULT_SCREEN_NAME,
                description="Generated from AI response",
                html_content=markup,
                css_content="",
                is_fallback=False,
                provenance="scraped",
            )

        logger.warning(f"Could not parse model response ({len(raw_text or '')} chars); using fallback screen")
        return synthesize_fallback(user_prompt)
