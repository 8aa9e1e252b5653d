"""
Design-assistant chat route for ScreenCraft
"""
from fastapi import APIRouter, Depends
import logging

from auth.dependencies import RateLimitStrict
from models.chat import ChatRequest, ChatResponse
from routes.dependencies import get_chat_service
from services.chat_service import CHAT_UNAVAILABLE_MESSAGE, ChatService

router = APIRouter(prefix="/api", tags=["Chat"])
logger = logging.getLogger(__name__)


@router.post("/chat", response_model=ChatResponse, dependencies=[Depends(RateLimitStrict)])
async def chat(request: ChatRequest, chat_service: ChatService = Depends(get_chat_service)):
    """
    Answer a design question. Failures come back as a 200 with a friendly
    message so the chat panel can show it inline.
    """
    try:
        text = await chat_service.reply(request.messages, request.project_id)
        return ChatResponse(text=text)
    except Exception as e:
        logger.error(f"[Chat] Error: {str(e)}", exc_info=True)
        return ChatResponse(text=CHAT_UNAVAILABLE_MESSAGE)
