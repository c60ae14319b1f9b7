"""
Directory Service

The persistence-facing operations for teams and users. Endpoints and the
GitHub import talk to this class only; it enforces name uniqueness, the
team deletion policy and team references, and attaches the derived folder
view to every user it returns.

Every write touches exactly one document (folder lists are embedded), so a
folder replacement is all-or-nothing without multi-document transactions.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from folderconfig.core import ensure_utc
from folderconfig.core.errors import (
    DuplicateName,
    NotFound,
    StorageFailure,
    TeamHasMembers,
    ValidationError,
)
from folderconfig.models.team import Team
from folderconfig.models.user import User
from folderconfig.repositories import TeamRepository, UserRepository
from folderconfig.schemas.user import UserCreate, UserResponse
from folderconfig.services.folders import (
    is_using_team_default,
    normalize_folders,
    resolve_effective_folders,
)

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver errors as StorageFailure."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"Database error during {operation}: {e}")
        raise StorageFailure(f"Failed to {operation}") from e


def build_user_view(user: User, team: Optional[Team]) -> UserResponse:
    """Combine a stored user with its team into the API representation."""
    return UserResponse(
        id=user.id,
        name=user.name,
        team_id=user.team_id,
        team_name=team.name if team else None,
        custom_folders=list(user.custom_folders) if user.custom_folders else None,
        effective_folders=resolve_effective_folders(user, team),
        is_using_team_default=is_using_team_default(user),
        github_id=user.github_id,
        github_login=user.github_login,
        avatar_url=user.avatar_url,
        github_url=user.github_url,
        created_at=ensure_utc(user.created_at),
        updated_at=ensure_utc(user.updated_at),
    )


def _now() -> datetime:
    return datetime.now(timezone.utc)


class DirectoryService:
    """Team and user operations on top of the MongoDB repositories."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.teams = TeamRepository(db)
        self.users = UserRepository(db)

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    async def list_teams(self) -> List[Team]:
        with storage_errors("list teams"):
            return await self.teams.list_all()

    async def get_team(self, team_id: str) -> Optional[Team]:
        with storage_errors("get team"):
            return await self.teams.get_by_id(team_id)

    async def create_team(self, name: str, folders: List[str]) -> Team:
        team = Team(name=name, folders=normalize_folders(folders))
        with storage_errors("create team"):
            if await self.teams.exists_by_name(name):
                raise DuplicateName(name)
            try:
                await self.teams.create(team)
            except DuplicateKeyError:
                # Lost a race with a concurrent create of the same name
                raise DuplicateName(name)
        logger.info(f"Created team '{team.name}' ({team.id}) with {len(team.folders)} folders")
        return team

    async def update_team(self, team_id: str, name: str, folders: List[str]) -> Team:
        with storage_errors("update team"):
            if await self.teams.get_by_id(team_id) is None:
                raise NotFound("Team", team_id)
            if await self.teams.exists_by_name(name, exclude_id=team_id):
                raise DuplicateName(name)
            try:
                matched = await self.teams.replace(
                    team_id, name, normalize_folders(folders), _now()
                )
            except DuplicateKeyError:
                raise DuplicateName(name)
            if not matched:
                raise NotFound("Team", team_id)
            team = await self.teams.get_by_id(team_id)
        if team is None:
            raise NotFound("Team", team_id)
        logger.info(f"Updated team '{team.name}' ({team.id})")
        return team

    async def delete_team(self, team_id: str) -> None:
        """Delete a team. Refused while any user is still assigned to it."""
        with storage_errors("delete team"):
            if await self.teams.get_by_id(team_id) is None:
                raise NotFound("Team", team_id)
            members = await self.users.count_by_team(team_id)
            if members > 0:
                raise TeamHasMembers(team_id, members)
            if not await self.teams.delete(team_id):
                raise NotFound("Team", team_id)
        logger.info(f"Deleted team {team_id}")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def _require_team(self, team_id: Optional[str]) -> Optional[Team]:
        if team_id is None:
            return None
        team = await self.teams.get_by_id(team_id)
        if team is None:
            raise ValidationError("Team does not exist")
        return team

    async def _view(self, user: User) -> UserResponse:
        team = await self.teams.get_by_id(user.team_id) if user.team_id else None
        return build_user_view(user, team)

    async def list_users(self) -> List[UserResponse]:
        with storage_errors("list users"):
            users = await self.users.list_all()
            team_ids = list({u.team_id for u in users if u.team_id})
            teams = await self.teams.find_by_ids(team_ids)
        team_map: Dict[str, Team] = {t.id: t for t in teams}
        return [build_user_view(u, team_map.get(u.team_id)) for u in users]

    async def get_user(self, user_id: str) -> Optional[UserResponse]:
        with storage_errors("get user"):
            user = await self.users.get_by_id(user_id)
            if user is None:
                return None
            return await self._view(user)

    async def create_user(self, data: UserCreate) -> Tuple[UserResponse, bool]:
        """
        Create a user, or refresh an existing one with the same GitHub ID.

        For an existing GitHub user only the name and profile fields are
        updated; team assignment and custom folders stay as they were.

        Returns:
            (user view, was_created)
        """
        custom_folders = normalize_folders(data.custom_folders) or None
        with storage_errors("create user"):
            await self._require_team(data.team_id)

            if data.github_id is not None:
                user, was_created = await self.users.upsert_by_github_id(
                    github_id=data.github_id,
                    name=data.name,
                    github_login=data.github_login,
                    avatar_url=data.avatar_url,
                    github_url=data.github_url,
                    team_id=data.team_id,
                    custom_folders=custom_folders,
                    now=_now(),
                )
                if was_created:
                    logger.info(f"Created user '{user.name}' from GitHub account {data.github_id}")
                else:
                    preserved = f"team {user.team_id}" if user.team_id else "no team"
                    logger.info(f"Updated existing user '{user.name}' (preserved: {preserved})")
                return await self._view(user), was_created

            user = User(
                name=data.name,
                team_id=data.team_id,
                custom_folders=custom_folders,
            )
            await self.users.create(user)
            logger.info(f"Created user '{user.name}' ({user.id})")
            return await self._view(user), True

    async def update_user(
        self,
        user_id: str,
        name: str,
        team_id: Optional[str],
        custom_folders: Optional[List[str]],
    ) -> UserResponse:
        with storage_errors("update user"):
            if await self.users.get_by_id(user_id) is None:
                raise NotFound("User", user_id)
            await self._require_team(team_id)
            matched = await self.users.replace_assignment(
                user_id,
                name,
                team_id,
                normalize_folders(custom_folders) or None,
                _now(),
            )
            if not matched:
                raise NotFound("User", user_id)
            user = await self.users.get_by_id(user_id)
            if user is None:
                raise NotFound("User", user_id)
            view = await self._view(user)
        logger.info(f"Updated user '{view.name}' ({view.id})")
        return view

    async def delete_user(self, user_id: str) -> None:
        with storage_errors("delete user"):
            if not await self.users.delete(user_id):
                raise NotFound("User", user_id)
        logger.info(f"Deleted user {user_id}")
