"""
Folder Resolution

Derives the folder list actually in force for a user. A non-empty custom
folder list overrides the team's folders entirely; otherwise the team's
folders apply, and a user without a team gets nothing.
"""

from typing import Iterable, List, Optional

from folderconfig.models.team import Team
from folderconfig.models.user import User


def normalize_folders(folders: Optional[Iterable[str]]) -> List[str]:
    """
    Clean up a folder list received from a client.

    Strips surrounding whitespace, drops blank entries and removes
    duplicates while keeping the first occurrence's position.
    """
    if not folders:
        return []
    seen = set()
    result: List[str] = []
    for folder in folders:
        path = folder.strip()
        if not path or path in seen:
            continue
        seen.add(path)
        result.append(path)
    return result


def has_custom_folders(user: User) -> bool:
    return bool(user.custom_folders)


def is_using_team_default(user: User) -> bool:
    return not has_custom_folders(user)


def resolve_effective_folders(user: User, team: Optional[Team]) -> List[str]:
    """
    Compute a user's effective folders.

    Args:
        user: The user whose folders are resolved
        team: The user's team, or None if unassigned or the reference is dangling

    Returns:
        A new list: the custom folders if any, else the team's folders, else []
    """
    if has_custom_folders(user):
        return list(user.custom_folders)
    if team is not None:
        return list(team.folders)
    return []
