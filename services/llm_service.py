"""
Gemini client for ScreenCraft
"""
import asyncio
import logging
from typing import Optional

from google import genai

from config.settings import GEMINI_API_KEY, GEMINI_MODEL, GENERATION_TIMEOUT
from models.errors import UpstreamError

logger = logging.getLogger(__name__)


class LLMService:
    """
    Text in, text out. Every failure mode of the model call, including the
    timeout, surfaces as UpstreamError.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None,
                 timeout: float = GENERATION_TIMEOUT):
        api_key = api_key or GEMINI_API_KEY
        if not api_key:
            raise ValueError("GEMINI_API_KEY not found in environment variables")

        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name or GEMINI_MODEL
        self.timeout = timeout

    async def complete(self, prompt: str) -> str:
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    self.client.models.generate_content,
                    model=self.model_name,
                    contents=prompt
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.error(f"Gemini call timed out after {self.timeout}s")
            raise UpstreamError(f"Model call timed out after {self.timeout}s")
        except Exception as e:
            logger.error(f"Gemini call failed: {str(e)}")
            raise UpstreamError(str(e)) from e

        text_output = self._extract_text(response)
        if not text_output:
            logger.error("No text parts found in Gemini response")
            raise UpstreamError("Empty response from model")
        return text_output

    @staticmethod
    def _extract_text(response) -> str:
        if response and response.candidates:
            candidate = response.candidates[0]
            if candidate.content and getattr(candidate.content, "parts", None):
                return "".join(p.text for p in candidate.content.parts if getattr(p, "text", None))
        return ""


# Global LLM service instance - created on first use
llm_service = None

def get_llm_service() -> LLMService:
    """Get or create the LLM service instance"""
    global llm_service
    if llm_service is None:
        llm_service = LLMService()
    return llm_service
