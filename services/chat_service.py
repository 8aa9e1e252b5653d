"""
Design-assistant chat for ScreenCraft
"""
import logging
import re
from typing import List, Optional

from models.chat import ChatMessage
from prompts.screen_prompts import create_chat_prompt
from services.llm_service import LLMService

logger = logging.getLogger(__name__)

CHAT_UNAVAILABLE_MESSAGE = "I'm having trouble connecting right now. Please try again in a moment."


def strip_markdown(text: str) -> str:
    """Remove fenced code blocks and inline code ticks."""
    text = re.sub(r"```[\s\S]*?```", "", text)
    text = re.sub(r"`([^`]+)`", r"\1", text)
    return text.strip()


class ChatService:
    def __init__(self, llm: LLMService):
        self.llm = llm

    async def reply(self, messages: List[ChatMessage], project_id: Optional[str] = None) -> str:
        """
        Answer the conversation. A failing model yields an apology, not an error,
        so the UI can show it inline.
        """
        conversation = "\n".join(f"{m.role}: {m.content}" for m in messages)
        prompt = create_chat_prompt(conversation, project_id)

        try:
            text = await self.llm.complete(prompt)
        except Exception as e:
            logger.error(f"[Chat] Model call failed: {str(e)}")
            return CHAT_UNAVAILABLE_MESSAGE

        return strip_markdown(text) or CHAT_UNAVAILABLE_MESSAGE
