"""
Screen preview route for ScreenCraft
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
import logging

from auth.dependencies import RateLimitLenient, require_caller_id
from models.errors import AppError, AuthzError, InternalError, NotFoundError
from routes.dependencies import get_project_service
from services.preview_service import PREVIEW_CSP, build_preview_document
from services.project_service import ProjectService

router = APIRouter(prefix="/api/screens", tags=["Screens"])
logger = logging.getLogger(__name__)


@router.get("/{screen_id}/preview", response_class=HTMLResponse, dependencies=[Depends(RateLimitLenient)])
async def preview_screen(
    screen_id: str,
    caller_id: str = Depends(require_caller_id),
    project_service: ProjectService = Depends(get_project_service),
):
    """
    Serve the screen as a standalone, sandboxed HTML document
    """
    try:
        screen = await project_service.find_screen_by_id(screen_id)
        if not screen:
            raise NotFoundError("Screen not found")

        project = await project_service.find_project_by_id(screen["project_id"])
        if not project:
            raise NotFoundError("Project not found")
        if project.get("user_id") != caller_id:
            raise AuthzError()

        return HTMLResponse(
            content=build_preview_document(screen),
            headers={"Content-Security-Policy": PREVIEW_CSP, "X-Content-Type-Options": "nosniff"},
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error building preview for screen {screen_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to build preview")
