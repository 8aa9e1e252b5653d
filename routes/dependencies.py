"""
Service providers for ScreenCraft routes
"""
from fastapi import Depends

from auth.middleware import get_auth_middleware
from services.chat_service import ChatService
from services.generation_service import GenerationService
from services.llm_service import LLMService, get_llm_service
from services.project_service import ProjectService
from services.screen_generator import ScreenGenerator


def get_project_service() -> ProjectService:
    return ProjectService(get_auth_middleware().supabase)


def get_llm() -> LLMService:
    return get_llm_service()


def get_generation_service(
    project_service: ProjectService = Depends(get_project_service),
    llm: LLMService = Depends(get_llm),
) -> GenerationService:
    return GenerationService(project_service, ScreenGenerator(llm))


def get_chat_service(llm: LLMService = Depends(get_llm)) -> ChatService:
    return ChatService(llm)
