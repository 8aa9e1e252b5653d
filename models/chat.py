"""
Design-assistant chat models for ScreenCraft
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage] = Field(..., min_length=1, description="Conversation so far, oldest first")
    project_id: Optional[str] = Field(default=None, alias="projectId")


class ChatResponse(BaseModel):
    text: str
