#!/usr/bin/env python3
"""
Import GitHub organisation members as users.

New accounts are created without a team or custom folders. Accounts that
already exist (matched on their numeric GitHub ID) only get their name and
profile fields refreshed; team assignments and custom folders are kept.

Members come either from the GitHub API or from a JSON file holding an array
of user objects as returned by ``GET /orgs/{org}/members``.

Usage:
    python scripts/import_github_users.py --org my-org [--token TOKEN] [--dry-run]
    python scripts/import_github_users.py --file members.json [--dry-run]

Exit codes:
    0  import finished (individual accounts may have been skipped)
    1  members could not be loaded or the database was unreachable
    2  invalid arguments
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from folderconfig.core.config import settings
from folderconfig.core.init_db import create_indexes
from folderconfig.services.directory import DirectoryService
from folderconfig.services.github import GitHubAPIError, GitHubService
from folderconfig.services.user_import import (
    find_orphaned_users,
    import_members,
    load_members_from_file,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def load_members(args):
    if args.file:
        logger.info(f"Reading members from {args.file}")
        return load_members_from_file(args.file)

    github = GitHubService(args.token, api_url=settings.GITHUB_API_URL)
    logger.info(f"Fetching members of GitHub organisation '{args.org}'")
    return await github.list_org_members(args.org)


async def run_import(args) -> int:
    logger.info("=" * 60)
    logger.info("GitHub User Import")
    logger.info("=" * 60)

    try:
        members = await load_members(args)
    except (GitHubAPIError, ValueError, OSError) as e:
        logger.error(f"Could not load members: {e}")
        return 1

    if not members:
        logger.warning("No members found, nothing to import")
        return 0

    logger.info(f"Loaded {len(members)} members")

    if args.dry_run:
        logger.warning("DRY RUN MODE - No changes will be made to the database")
        for member in members:
            logger.info(f"  would import {member.login} (GitHub ID {member.id})")
        return 0

    client = AsyncIOMotorClient(settings.MONGODB_URL)
    try:
        db = client[settings.DATABASE_NAME]
        await create_indexes(db)
        directory = DirectoryService(db)

        summary = await import_members(directory, members)

        if args.report_orphans:
            orphans = await find_orphaned_users(directory, members)
            if orphans:
                logger.warning(f"{len(orphans)} users in the database are no longer in the member list:")
                for user in orphans:
                    logger.warning(f"  - {user.name} ({user.github_login}) - Team: {user.team_name or 'No Team'}")
            else:
                logger.info("All GitHub-linked users are still members")
    except PyMongoError as e:
        logger.error(f"Database error: {e}")
        return 1
    finally:
        client.close()

    logger.info("=" * 60)
    logger.info(f"Created: {summary.created}")
    logger.info(f"Updated: {summary.updated}")
    logger.info(f"Skipped: {summary.skipped}")
    logger.info(f"Total:   {summary.total}")
    if summary.new_logins:
        logger.info(f"New users: {', '.join(summary.new_logins)}")
    logger.info("=" * 60)
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Import GitHub organisation members as users")
    parser.add_argument("--org", default=settings.GITHUB_ORG, help="GitHub organisation (default: GITHUB_ORG)")
    parser.add_argument("--token", default=settings.GITHUB_TOKEN, help="GitHub access token (default: GITHUB_TOKEN)")
    parser.add_argument("--file", help="Read members from a JSON file instead of the GitHub API")
    parser.add_argument("--dry-run", action="store_true", help="List the members without writing anything")
    parser.add_argument(
        "--report-orphans",
        action="store_true",
        help="Report GitHub-linked users that are no longer organisation members",
    )
    args = parser.parse_args(argv)

    if not args.file and not (args.org and args.token):
        parser.error("either --file, or --org and --token (or GITHUB_ORG and GITHUB_TOKEN) are required")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    return asyncio.run(run_import(args))


if __name__ == "__main__":
    sys.exit(main())
