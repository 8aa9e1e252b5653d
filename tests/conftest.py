import os

# Settings are read at import time
os.environ.setdefault("LOG_FILE", os.devnull)
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import uuid
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import jwt
import pytest
from fastapi.testclient import TestClient

from auth.dependencies import get_authenticator
from auth.middleware import AuthMiddleware
from models.project import PromptHistoryCreate
from routes.dependencies import get_llm, get_project_service
from services.rate_limiter import RateLimiter

TEST_JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"
OWNER_ID = "user-owner"
OTHER_USER_ID = "user-other"


def make_token(user_id: str, secret: str = TEST_JWT_SECRET, expires_in: int = 3600, audience: str = "authenticated") -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": f"{user_id}@example.com",
        "aud": audience,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_header(user_id: str = OWNER_ID) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class InMemoryProjectService:
    """Dict-backed stand-in for ProjectService with the same async interface."""

    def __init__(self):
        self.projects: Dict[str, Dict[str, Any]] = {}
        self.screens: Dict[str, Dict[str, Any]] = {}
        self.prompt_history: List[Dict[str, Any]] = []
        self.fail_prompt_history = False

    def _now(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def add_project(self, user_id: str = OWNER_ID, name: str = "Fitness Tracker", project_id: Optional[str] = None) -> Dict[str, Any]:
        project_id = project_id or str(uuid.uuid4())
        self.projects[project_id] = {
            "id": project_id,
            "user_id": user_id,
            "name": name,
            "thumbnail": None,
            "created_at": self._now(),
            "updated_at": self._now(),
        }
        return self.projects[project_id]

    async def find_project_by_id(self, project_id):
        return self.projects.get(project_id)

    async def list_projects(self, user_id, limit=50, offset=0):
        owned = [dict(p) for p in self.projects.values() if p["user_id"] == user_id]
        for p in owned:
            p["screen_count"] = sum(1 for s in self.screens.values() if s["project_id"] == p["id"])
        return owned[offset:offset + limit]

    async def count_projects(self, user_id):
        return sum(1 for p in self.projects.values() if p["user_id"] == user_id)

    async def create_project(self, user_id, name):
        return self.add_project(user_id=user_id, name=name)

    async def update_project(self, project_id, update_data):
        project = self.projects.get(project_id)
        if not project:
            return None
        project.update({k: v for k, v in update_data.items() if v is not None})
        project["updated_at"] = self._now()
        return project

    async def delete_project(self, project_id):
        return self.projects.pop(project_id, None) is not None

    async def get_project_screens(self, project_id):
        return [s for s in self.screens.values() if s["project_id"] == project_id]

    async def find_screen_by_id(self, screen_id):
        return self.screens.get(screen_id)

    async def create_screen(self, screen_data):
        screen_id = str(uuid.uuid4())
        self.screens[screen_id] = {**screen_data, "id": screen_id, "created_at": self._now(), "updated_at": self._now()}
        return self.screens[screen_id]

    async def update_screen(self, screen_id, project_id, update_data):
        screen = self.screens.get(screen_id)
        if not screen or screen["project_id"] != project_id:
            return None
        screen.update(update_data)
        screen["updated_at"] = self._now()
        return screen

    async def update_screen_layout(self, screen_id, project_id, layout):
        fields = {k: v for k, v in layout.items() if k in ("x", "y", "width", "height", "name") and v is not None}
        if not fields:
            return None
        return await self.update_screen(screen_id, project_id, fields)

    async def create_prompt_history(self, entry: PromptHistoryCreate):
        if self.fail_prompt_history:
            raise RuntimeError("prompt_history insert failed")
        record = {**entry.model_dump(), "id": str(uuid.uuid4())}
        self.prompt_history.append(record)
        return record


@pytest.fixture
def store():
    return InMemoryProjectService()


@pytest.fixture
def project(store):
    return store.add_project()


@pytest.fixture
def fake_llm():
    llm = Mock()
    llm.complete = AsyncMock(
        return_value='{"name":"Login","description":"","htmlContent":"<div>Login</div>","cssContent":""}'
    )
    return llm


@pytest.fixture
def authenticator():
    return AuthMiddleware(supabase_client=Mock(), jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def client(store, fake_llm, authenticator):
    from index import app

    app.dependency_overrides[get_project_service] = lambda: store
    app.dependency_overrides[get_llm] = lambda: fake_llm
    app.dependency_overrides[get_authenticator] = lambda: authenticator
    app.state.rate_limiter = RateLimiter()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
