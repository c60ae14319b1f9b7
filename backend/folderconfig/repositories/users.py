"""
User Repository

Centralizes all database operations for users.
"""

import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from folderconfig.models.user import User
from folderconfig.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    collection_name = "users"
    model_class = User

    async def list_all(self) -> List[User]:
        """All users ordered by name."""
        return await self.find_many({}, sort_by="name")

    async def count_by_team(self, team_id: str) -> int:
        """Count users assigned to a team."""
        return await self.collection.count_documents({"team_id": team_id})

    async def replace_assignment(
        self,
        user_id: str,
        name: str,
        team_id: Optional[str],
        custom_folders: Optional[List[str]],
        updated_at: datetime,
    ) -> bool:
        """
        Overwrite name, team and the whole custom folder list in one write.

        Returns False if no user has this ID.
        """
        result = await self.collection.update_one(
            {"_id": user_id},
            {
                "$set": {
                    "name": name,
                    "team_id": team_id,
                    "custom_folders": custom_folders,
                    "updated_at": updated_at,
                }
            },
        )
        return result.matched_count > 0

    async def upsert_by_github_id(
        self,
        github_id: int,
        name: str,
        github_login: Optional[str],
        avatar_url: Optional[str],
        github_url: Optional[str],
        team_id: Optional[str],
        custom_folders: Optional[List[str]],
        now: datetime,
    ) -> Tuple[User, bool]:
        """
        Insert a GitHub user or refresh the profile of an existing one.

        On update only name and profile fields change; team assignment and
        custom folders are written on insert only.

        Returns:
            (user, was_created)
        """
        new_id = str(uuid.uuid4())
        query = {"github_id": github_id}
        update = {
            "$set": {
                "name": name,
                "github_login": github_login,
                "avatar_url": avatar_url,
                "github_url": github_url,
                "updated_at": now,
            },
            "$setOnInsert": {
                "_id": new_id,
                "team_id": team_id,
                "custom_folders": custom_folders,
                "created_at": now,
            },
        }
        try:
            doc = await self.collection.find_one_and_update(
                query, update, upsert=True, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            # A concurrent upsert inserted this github_id first; the retry matches it
            doc = await self.collection.find_one_and_update(
                query, update, upsert=True, return_document=ReturnDocument.AFTER
            )
        return User(**doc), doc["_id"] == new_id
