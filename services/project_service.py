"""
Project service for ScreenCraft database operations
"""
import asyncio
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
import logging
from supabase import Client

from config.decorators import retry_on_ssl_error
from models.project import PromptHistoryCreate

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProjectService:
    """
    Storage for projects, their screens and their prompt history.

    Lookups return None when the row does not exist; database errors are not
    caught here and propagate to the route.
    """

    def __init__(self, supabase_client: Client):
        self.supabase = supabase_client

    async def _execute(self, query):
        return await asyncio.to_thread(query.execute)

    # --- projects ---

    @retry_on_ssl_error
    async def find_project_by_id(self, project_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.supabase.table("projects").select("*").eq("id", project_id).limit(1)
        )
        return response.data[0] if response.data else None

    @retry_on_ssl_error
    async def list_projects(self, user_id: str, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        """
        Get a user's projects, newest first, each with its screen count
        """
        response = await self._execute(
            self.supabase.table("projects")
            .select("*, screens(count)")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
        )

        projects = []
        for row in response.data or []:
            counts = row.pop("screens", None) or [{}]
            row["screen_count"] = counts[0].get("count", 0)
            projects.append(row)
        return projects

    @retry_on_ssl_error
    async def count_projects(self, user_id: str) -> int:
        response = await self._execute(
            self.supabase.table("projects").select("id", count="exact").eq("user_id", user_id)
        )
        return response.count or 0

    @retry_on_ssl_error
    async def create_project(self, user_id: str, name: str) -> Optional[Dict[str, Any]]:
        now = _now()
        response = await self._execute(
            self.supabase.table("projects").insert({
                "user_id": user_id,
                "name": name,
                "created_at": now,
                "updated_at": now,
            })
        )
        if response.data:
            logger.info(f"Created project {response.data[0]['id']} for user {user_id}")
            return response.data[0]
        return None

    @retry_on_ssl_error
    async def update_project(self, project_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        # Filter out None values and add updated_at
        filtered_data = {k: v for k, v in update_data.items() if v is not None}
        filtered_data["updated_at"] = _now()

        response = await self._execute(
            self.supabase.table("projects").update(filtered_data).eq("id", project_id)
        )
        return response.data[0] if response.data else None

    @retry_on_ssl_error
    async def delete_project(self, project_id: str) -> bool:
        """
        Delete a project; screens and prompt history go with it (ON DELETE CASCADE)
        """
        response = await self._execute(
            self.supabase.table("projects").delete().eq("id", project_id)
        )
        if response.data:
            logger.info(f"Deleted project {project_id}")
            return True
        return False

    # --- screens ---

    @retry_on_ssl_error
    async def get_project_screens(self, project_id: str) -> List[Dict[str, Any]]:
        response = await self._execute(
            self.supabase.table("screens").select("*").eq("project_id", project_id).order("created_at")
        )
        return response.data or []

    @retry_on_ssl_error
    async def find_screen_by_id(self, screen_id: str) -> Optional[Dict[str, Any]]:
        response = await self._execute(
            self.supabase.table("screens").select("*").eq("id", screen_id).limit(1)
        )
        return response.data[0] if response.data else None

    @retry_on_ssl_error
    async def create_screen(self, screen_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        now = _now()
        record = {**screen_data, "created_at": now, "updated_at": now}
        response = await self._execute(self.supabase.table("screens").insert(record))
        if response.data:
            logger.info(f"Created screen {response.data[0]['id']} in project {screen_data.get('project_id')}")
            return response.data[0]
        return None

    @retry_on_ssl_error
    async def update_screen(self, screen_id: str, project_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update a screen in place. Scoped to the project, so a screen id from
        another project matches nothing and None is returned.
        """
        record = {**update_data, "updated_at": _now()}
        response = await self._execute(
            self.supabase.table("screens").update(record).eq("id", screen_id).eq("project_id", project_id)
        )
        return response.data[0] if response.data else None

    async def update_screen_layout(self, screen_id: str, project_id: str, layout: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Persist canvas geometry (x, y, width, height, name) of a screen"""
        fields = {k: v for k, v in layout.items() if k in ("x", "y", "width", "height", "name") and v is not None}
        if not fields:
            return None
        return await self.update_screen(screen_id, project_id, fields)

    # --- prompt history ---

    @retry_on_ssl_error
    async def create_prompt_history(self, entry: PromptHistoryCreate) -> Optional[Dict[str, Any]]:
        record = entry.model_dump()
        record["created_at"] = _now()
        response = await self._execute(self.supabase.table("prompt_history").insert(record))
        return response.data[0] if response.data else None
