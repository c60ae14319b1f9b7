"""
GitHub User Import

Synchronises the members of a GitHub organisation into the user directory.
Accounts are matched on their numeric GitHub ID: new accounts are created
without a team or custom folders, known accounts only get their name and
profile fields refreshed.

A failure on one account is logged and counted as skipped; the batch always
runs to the end.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from pydantic import ValidationError as PydanticValidationError

from folderconfig.core.errors import DirectoryError
from folderconfig.core.metrics import users_imported_total
from folderconfig.schemas.github import GitHubMember
from folderconfig.schemas.user import UserCreate, UserResponse
from folderconfig.services.directory import DirectoryService
from folderconfig.services.github import GitHubService

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    created: int = 0
    updated: int = 0
    skipped: int = 0
    new_logins: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.created + self.updated + self.skipped

    def log(self) -> None:
        logger.info(
            f"Import summary: {self.created} new, {self.updated} updated, "
            f"{self.skipped} skipped, {self.total} processed"
        )


def load_members_from_file(path: Union[str, Path]) -> List[GitHubMember]:
    """
    Read a JSON array of GitHub user objects (as exported from the API).

    Raises:
        ValueError: if the file does not contain a JSON array
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of users")

    members = []
    for entry in data:
        try:
            members.append(GitHubMember(**entry))
        except (TypeError, PydanticValidationError) as e:
            logger.warning(f"Skipping malformed entry in {path}: {e}")
    return members


async def import_members(
    directory: DirectoryService, members: Iterable[GitHubMember]
) -> ImportSummary:
    """Upsert every member; never raises for a single bad account."""
    summary = ImportSummary()

    for member in members:
        try:
            _, was_created = await directory.create_user(
                UserCreate(
                    name=member.login,
                    team_id=None,
                    custom_folders=None,
                    github_id=member.id,
                    github_login=member.login,
                    avatar_url=member.avatar_url,
                    github_url=member.html_url,
                )
            )
        except (DirectoryError, PydanticValidationError) as e:
            summary.skipped += 1
            users_imported_total.labels(outcome="skipped").inc()
            logger.error(f"Error importing user {member.login}: {e}")
            continue

        if was_created:
            summary.created += 1
            summary.new_logins.append(member.login)
            users_imported_total.labels(outcome="created").inc()
            logger.info(f"New user created: {member.login} (no team assigned)")
        else:
            summary.updated += 1
            users_imported_total.labels(outcome="updated").inc()
            logger.debug(f"User updated: {member.login} (preserved existing data)")

    summary.log()
    return summary


async def find_orphaned_users(
    directory: DirectoryService, members: Iterable[GitHubMember]
) -> List[UserResponse]:
    """GitHub-linked users that are no longer in the member list. They are kept, only reported."""
    member_ids = {m.id for m in members}
    users = await directory.list_users()
    return [u for u in users if u.github_id is not None and u.github_id not in member_ids]


async def import_github_org(
    directory: DirectoryService,
    github: GitHubService,
    org: str,
    report_orphans: bool = False,
) -> ImportSummary:
    members = await github.list_org_members(org)
    summary = await import_members(directory, members)

    if report_orphans:
        orphans = await find_orphaned_users(directory, members)
        if orphans:
            logger.warning(f"Found {len(orphans)} users in database not in GitHub organisation '{org}'")
            for user in orphans:
                logger.warning(f"  - {user.name} ({user.github_login}) - Team: {user.team_name or 'No Team'}")

    return summary
