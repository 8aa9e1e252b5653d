"""
Project routes for ScreenCraft
"""
from fastapi import APIRouter, Depends, Query
from typing import Any, Dict
import logging

from auth.dependencies import RateLimitLenient, RateLimitModerate, require_caller_id
from models.errors import AppError, AuthzError, InternalError, NotFoundError
from models.project import (
    Pagination,
    ProjectCreateRequest,
    ProjectDetail,
    ProjectListResponse,
    ProjectResponse,
    ProjectSaveRequest,
    ProjectSummary,
    ProjectUpdateRequest,
    PromptHistoryCreate,
)
from routes.dependencies import get_llm, get_project_service
from services.llm_service import LLMService
from services.project_namer import DEFAULT_PROJECT_NAME, generate_project_name
from services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["Projects"])
logger = logging.getLogger(__name__)


async def _load_owned_project(project_service: ProjectService, project_id: str, caller_id: str) -> Dict[str, Any]:
    """Missing and foreign projects are both reported as 403."""
    project = await project_service.find_project_by_id(project_id)
    if not project or project.get("user_id") != caller_id:
        raise AuthzError()
    return project


@router.get("", response_model=ProjectListResponse, dependencies=[Depends(RateLimitLenient)])
async def list_projects(
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    caller_id: str = Depends(require_caller_id),
    project_service: ProjectService = Depends(get_project_service),
):
    """
    List the caller's projects, newest first
    """
    try:
        projects = await project_service.list_projects(caller_id, limit=limit, offset=offset)
        total = await project_service.count_projects(caller_id)

        return ProjectListResponse(
            projects=[ProjectSummary(**p) for p in projects],
            pagination=Pagination(
                total=total,
                limit=limit,
                offset=offset,
                has_more=offset + len(projects) < total,
            ),
        )

    except AppError:
        raise
    except Exception as e:
        logger.error(f"[Projects] Error fetching projects: {str(e)}", exc_info=True)
        raise InternalError("Failed to fetch projects")


@router.post("", response_model=ProjectResponse, dependencies=[Depends(RateLimitModerate)])
async def create_project(
    request: ProjectCreateRequest,
    caller_id: str = Depends(require_caller_id),
    project_service: ProjectService = Depends(get_project_service),
    llm: LLMService = Depends(get_llm),
):
    """
    Create a project named by the model after the first prompt
    """
    try:
        project_name = await generate_project_name(llm, request.prompt)
        project = await project_service.create_project(caller_id, project_name or DEFAULT_PROJECT_NAME)
        if not project:
            raise InternalError("Failed to create project")

        # The project is kept even if the history write fails
        try:
            await project_service.create_prompt_history(
                PromptHistoryCreate(project_id=project["id"], content=request.prompt, role="user")
            )
        except Exception as e:
            logger.error(f"[Projects] Failed to record first prompt for project {project['id']}: {str(e)}", exc_info=True)

        return ProjectResponse(**project)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"[Projects] Error creating project: {str(e)}", exc_info=True)
        raise InternalError("Failed to create project")


@router.post("/save", dependencies=[Depends(RateLimitModerate)])
async def save_project(
    request: ProjectSaveRequest,
    caller_id: str = Depends(require_caller_id),
    project_service: ProjectService = Depends(get_project_service),
):
    """
    Save the canvas: project name/thumbnail and each screen's position and size
    """
    try:
        project = await project_service.find_project_by_id(request.project_id)
        if not project:
            raise NotFoundError("Project not found")
        if project.get("user_id") != caller_id:
            raise AuthzError()

        updated_project = await project_service.update_project(request.project_id, {
            "name": request.name or None,
            "thumbnail": request.thumbnail or None,
        })

        for layout in request.screens or []:
            await project_service.update_screen_layout(layout.id, request.project_id, layout.model_dump())

        return {
            "success": True,
            "project": ProjectResponse(**(updated_project or project)),
            "message": "Project saved successfully",
        }

    except AppError:
        raise
    except Exception as e:
        logger.error(f"[Projects] Error saving project: {str(e)}", exc_info=True)
        raise InternalError("Failed to save project")


@router.get("/{project_id}", response_model=ProjectDetail, dependencies=[Depends(RateLimitLenient)])
async def get_project(
    project_id: str,
    caller_id: str = Depends(require_caller_id),
    project_service: ProjectService = Depends(get_project_service),
):
    try:
        project = await project_service.find_project_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        if project.get("user_id") != caller_id:
            raise AuthzError()

        screens = await project_service.get_project_screens(project_id)
        return ProjectDetail(**project, screens=screens)

    except AppError:
        raise
    except Exception as e:
        logger.error(f"[Projects] Error fetching project {project_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to fetch project")


@router.patch("/{project_id}", response_model=ProjectResponse, dependencies=[Depends(RateLimitModerate)])
async def update_project(
    project_id: str,
    request: ProjectUpdateRequest,
    caller_id: str = Depends(require_caller_id),
    project_service: ProjectService = Depends(get_project_service),
):
    """
    Update whitelisted project fields (name, thumbnail)
    """
    try:
        project = await _load_owned_project(project_service, project_id, caller_id)

        update_data = request.model_dump(exclude_none=True)
        if "thumbnail" in update_data:
            update_data["thumbnail"] = str(update_data["thumbnail"])

        updated = await project_service.update_project(project_id, update_data)
        return ProjectResponse(**(updated or project))

    except AppError:
        raise
    except Exception as e:
        logger.error(f"[Projects] Error updating project {project_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to update project")


@router.delete("/{project_id}", dependencies=[Depends(RateLimitModerate)])
async def delete_project(
    project_id: str,
    caller_id: str = Depends(require_caller_id),
    project_service: ProjectService = Depends(get_project_service),
):
    try:
        await _load_owned_project(project_service, project_id, caller_id)
        await project_service.delete_project(project_id)
        return {"success": True}

    except AppError:
        raise
    except Exception as e:
        logger.error(f"[Projects] Error deleting project {project_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to delete project")
