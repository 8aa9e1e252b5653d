"""
Generation service for ScreenCraft: the prompt-to-screen use case
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any
import logging

from config.settings import DEFAULT_SCREEN_HEIGHT, DEFAULT_SCREEN_WIDTH
from models.errors import AuthError, AuthzError, InternalError, NotFoundError
from models.project import PromptHistoryCreate
from services.project_service import ProjectService
from services.screen_generator import ScreenGenerator

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    screen: Dict[str, Any]
    # True when the content is the synthesized fallback or scraped markup
    fallback: bool
    provenance: str


class GenerationService:
    def __init__(self, project_service: ProjectService, screen_generator: ScreenGenerator):
        self.projects = project_service
        self.generator = screen_generator

    async def authorize_project(self, caller_id: Optional[str], project_id: str) -> Dict[str, Any]:
        """
        Load a project the caller owns, or raise AuthError / NotFoundError / AuthzError
        """
        if not caller_id:
            raise AuthError()

        project = await self.projects.find_project_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")

        if project.get("user_id") != caller_id:
            logger.warning(f"User {caller_id} attempted to access project {project_id}")
            raise AuthzError()

        return project

    async def handle_generate(self, caller_id: Optional[str], project_id: str, prompt: str,
                              screen_id: Optional[str] = None) -> GenerationResult:
        """
        Generate screen content for a prompt and store it.

        With a screen_id the existing screen is regenerated in place; without
        one a new 375x812 screen is created. One prompt-history row is appended
        either way.
        """
        project = await self.authorize_project(caller_id, project_id)

        if screen_id:
            existing = await self.projects.find_screen_by_id(screen_id)
            if not existing or existing.get("project_id") != project_id:
                raise NotFoundError("Screen not found")

        screen_data = await self.generator.generate(project.get("name") or "", prompt)
        content = {
            "name": screen_data.name,
            "html_content": screen_data.html_content,
            "css_content": screen_data.css_content,
        }

        if screen_id:
            screen = await self.projects.update_screen(screen_id, project_id, content)
            if screen is None:
                raise NotFoundError("Screen not found")
        else:
            screen = await self.projects.create_screen({
                **content,
                "project_id": project_id,
                "x": 0,
                "y": 0,
                "width": DEFAULT_SCREEN_WIDTH,
                "height": DEFAULT_SCREEN_HEIGHT,
            })
            if screen is None:
                raise InternalError("Failed to generate screen")

        # The screen is kept even if the history write fails
        try:
            await self.projects.create_prompt_history(
                PromptHistoryCreate(project_id=project_id, content=prompt, role="user")
            )
        except Exception as e:
            logger.error(f"Failed to record prompt history for project {project_id}: {str(e)}", exc_info=True)

        fallback = screen_data.is_fallback or screen_data.provenance == "scraped"
        logger.info(
            f"Screen {screen.get('id')} {'updated' if screen_id else 'created'} "
            f"(provenance={screen_data.provenance}, fallback={fallback})"
        )
        return GenerationResult(screen=screen, fallback=fallback, provenance=screen_data.provenance)
