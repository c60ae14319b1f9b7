"""
Repository Pattern for Database Access

Thin layer over the MongoDB ``teams`` and ``users`` collections.
"""

from folderconfig.repositories.base import BaseRepository
from folderconfig.repositories.teams import TeamRepository
from folderconfig.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "TeamRepository",
    "UserRepository",
]
