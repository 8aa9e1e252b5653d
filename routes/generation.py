"""
Screen generation route for ScreenCraft
"""
from fastapi import APIRouter, Depends
import logging
import uuid

from auth.dependencies import RateLimitStrict, require_caller_id
from models.errors import AppError, InternalError
from models.screen import GenerateRequest, GenerateResponse, ScreenResponse
from routes.dependencies import get_generation_service
from services.generation_service import GenerationService

router = APIRouter(prefix="/api", tags=["Generation"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerateResponse, response_model_exclude_none=True, dependencies=[Depends(RateLimitStrict)])
async def generate_screen(
    request: GenerateRequest,
    caller_id: str = Depends(require_caller_id),
    generation_service: GenerationService = Depends(get_generation_service),
):
    """
    Generate a screen from a prompt, or regenerate an existing one in place
    """
    request_id = str(uuid.uuid4())[:8]
    logger.info(f"[Generate][{request_id}] project={request.project_id} screen={request.screen_id or 'new'} user={caller_id}")

    try:
        result = await generation_service.handle_generate(
            caller_id,
            request.project_id,
            request.prompt,
            request.screen_id,
        )

        # "fallback" is only present when true
        return GenerateResponse(
            screen=ScreenResponse(**result.screen),
            fallback=True if result.fallback else None,
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"[Generate][{request_id}] Unexpected error: {str(e)}", exc_info=True)
        raise InternalError("Failed to generate screen")
