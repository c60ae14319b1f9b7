"""
Team Repository

Centralizes all database operations for teams.
"""

from datetime import datetime
from typing import List, Optional

from folderconfig.models.team import Team
from folderconfig.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for team database operations."""

    collection_name = "teams"
    model_class = Team

    async def exists_by_name(self, name: str, exclude_id: Optional[str] = None) -> bool:
        """Check if a team with this name exists, optionally ignoring one team."""
        query = {"name": name}
        if exclude_id:
            query["_id"] = {"$ne": exclude_id}
        return await self.collection.count_documents(query) > 0

    async def list_all(self) -> List[Team]:
        """All teams ordered by name."""
        return await self.find_many({}, sort_by="name")

    async def replace(
        self, team_id: str, name: str, folders: List[str], updated_at: datetime
    ) -> bool:
        """
        Overwrite a team's name and whole folder list in one write.

        Returns False if no team has this ID.
        """
        result = await self.collection.update_one(
            {"_id": team_id},
            {"$set": {"name": name, "folders": folders, "updated_at": updated_at}},
        )
        return result.matched_count > 0
