"""
Domain Errors

Exceptions raised by the service layer. The API maps each class to an HTTP
status via ``status_code``; anything that is not a ``DirectoryError`` is
treated as an unexpected server error.
"""

from typing import Optional


class DirectoryError(Exception):
    """Base class for team/user directory errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DirectoryError):
    """Missing or malformed input."""

    status_code = 400


class NotFound(DirectoryError):
    """Referenced team or user does not exist."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.resource_id = resource_id


class Conflict(DirectoryError):
    """Operation conflicts with existing state."""

    status_code = 409


class DuplicateName(Conflict):
    def __init__(self, name: str):
        super().__init__(f"A team named '{name}' already exists")
        self.name = name


class TeamHasMembers(Conflict):
    def __init__(self, team_id: str, member_count: int):
        super().__init__(
            "Cannot delete team with assigned users. Please reassign users first."
        )
        self.team_id = team_id
        self.member_count = member_count


class StorageFailure(DirectoryError):
    """Underlying database failure. The message is never shown to clients."""

    status_code = 500
