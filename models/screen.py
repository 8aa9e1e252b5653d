"""
Screen models for ScreenCraft: generation payloads and persisted screens.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from config.settings import MAX_PROMPT_LENGTH


class ScreenData(BaseModel):
    """
    A generated screen that has not been persisted yet.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    html_content: str = Field(..., alias="htmlContent")
    css_content: str = Field(default="", alias="cssContent")
    is_fallback: bool = Field(default=False, alias="isFallback")
    # "model", "scraped" or "fallback"
    provenance: str = "model"


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., min_length=1, alias="projectId", description="Project that owns the screen")
    prompt: str = Field(..., min_length=1, max_length=MAX_PROMPT_LENGTH, description="Description of the screen to generate")
    screen_id: Optional[str] = Field(default=None, alias="screenId", description="Regenerate this screen in place")


class ScreenResponse(BaseModel):
    """
    Model for returning a screen record to the frontend.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    project_id: str = Field(..., alias="projectId")
    name: str
    html_content: str = Field(default="", alias="htmlContent")
    css_content: Optional[str] = Field(default="", alias="cssContent")
    x: float = 0
    y: float = 0
    width: int
    height: int
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class GenerateResponse(BaseModel):
    screen: ScreenResponse
    fallback: Optional[bool] = None


class ScreenLayout(BaseModel):
    """Canvas-owned geometry of a screen, written by the project save."""
    id: str
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
