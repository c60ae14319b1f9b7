"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any app imports to prevent
accidental connections to real databases.
"""

import os
import sys

# Ensure the backend app is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any app code imports the settings singleton
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_folder_config"
os.environ["GITHUB_TOKEN"] = ""
os.environ["GITHUB_ORG"] = ""
os.environ["IMPORT_ON_STARTUP"] = "false"

import pytest  # noqa: E402

from folderconfig.models.team import Team  # noqa: E402
from folderconfig.models.user import User  # noqa: E402
from folderconfig.services.directory import DirectoryService  # noqa: E402
from tests.mocks.mongodb import FakeDatabase  # noqa: E402


@pytest.fixture
def fake_db():
    """In-memory stand-in for the teams and users collections."""
    return FakeDatabase()


@pytest.fixture
def directory(fake_db):
    return DirectoryService(fake_db)


@pytest.fixture
def dev_team():
    return Team(id="team-dev", name="Dev", folders=["/Code", "/Docs"])


@pytest.fixture
def alice():
    return User(id="user-alice", name="Alice")


@pytest.fixture
def github_member_payload():
    """A member entry as returned by GET /orgs/{org}/members."""
    return {
        "login": "octocat",
        "id": 583231,
        "node_id": "MDQ6VXNlcjU4MzIzMQ==",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "site_admin": False,
    }
