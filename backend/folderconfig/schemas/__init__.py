"""
Schema Exports

Request and response models for the REST API.
"""

from folderconfig.schemas.github import GitHubMember
from folderconfig.schemas.team import TeamCreate, TeamResponse, TeamUpdate
from folderconfig.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "GitHubMember",
    "TeamCreate",
    "TeamResponse",
    "TeamUpdate",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
