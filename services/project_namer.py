"""
Names a new project from the prompt it starts with.
"""
import logging

from prompts.screen_prompts import PROJECT_NAME_PROMPT
from services.llm_service import LLMService

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Untitled Project"
MAX_PROJECT_NAME_LENGTH = 255


async def generate_project_name(llm: LLMService, user_prompt: str) -> str:
    """Ask the model for a short name; any failure gives "Untitled Project"."""
    try:
        text = await llm.complete(PROJECT_NAME_PROMPT.format(user_prompt=user_prompt))
    except Exception as e:
        logger.error(f"[Projects] Name generation failed: {str(e)}")
        return DEFAULT_PROJECT_NAME

    # Models like to quote the name or add a trailing period
    name = text.strip().splitlines()[0].strip().strip('"\'').rstrip(".").strip() if text.strip() else ""
    return name[:MAX_PROJECT_NAME_LENGTH] or DEFAULT_PROJECT_NAME
