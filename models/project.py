"""
Project models for ScreenCraft
"""
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from models.screen import ScreenLayout, ScreenResponse


class ProjectCreateRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=1000, description="Idea the project starts from")


class ProjectUpdateRequest(BaseModel):
    """Only these fields may be changed through PATCH."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    thumbnail: Optional[AnyHttpUrl] = None


class ProjectSaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., min_length=1, alias="projectId")
    name: Optional[str] = Field(default=None, max_length=255)
    thumbnail: Optional[str] = None
    screens: Optional[List[ScreenLayout]] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    user_id: str = Field(..., alias="userId")
    name: str
    thumbnail: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class ProjectSummary(ProjectResponse):
    screen_count: int = Field(default=0, alias="screenCount")


class ProjectDetail(ProjectResponse):
    screens: List[ScreenResponse] = []


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    limit: int
    offset: int
    has_more: bool = Field(..., alias="hasMore")


class ProjectListResponse(BaseModel):
    projects: List[ProjectSummary]
    pagination: Pagination


class PromptHistoryCreate(BaseModel):
    """
    Model for appending a prompt to a project's history.
    """
    project_id: str
    content: str
    role: str = "user"
