"""Tests for UserRepository.

Tests query shapes, the GitHub upsert and result mapping using mocked MongoDB.
"""

import asyncio
from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from folderconfig.repositories.users import UserRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db


def _repo(collection):
    return UserRepository(create_mock_db({"users": collection}))


class TestCountByTeam:
    def test_filters_on_team_id(self):
        collection = create_mock_collection(count_documents=3)
        repo = _repo(collection)

        result = asyncio.run(repo.count_by_team("team-1"))

        assert result == 3
        collection.count_documents.assert_called_once_with({"team_id": "team-1"})


class TestReplaceAssignment:
    def test_overwrites_whole_assignment(self):
        collection = create_mock_collection()
        repo = _repo(collection)
        now = datetime.now(timezone.utc)

        result = asyncio.run(repo.replace_assignment("u1", "Alice", None, None, now))

        assert result is True
        collection.update_one.assert_called_once_with(
            {"_id": "u1"},
            {
                "$set": {
                    "name": "Alice",
                    "team_id": None,
                    "custom_folders": None,
                    "updated_at": now,
                }
            },
        )

    def test_returns_false_when_no_match(self):
        repo = _repo(create_mock_collection(matched_count=0))
        now = datetime.now(timezone.utc)
        assert asyncio.run(repo.replace_assignment("missing", "A", None, None, now)) is False


class TestUpsertByGithubId:
    def _call(self, repo, now):
        return asyncio.run(
            repo.upsert_by_github_id(
                github_id=42,
                name="octocat",
                github_login="octocat",
                avatar_url="https://avatars.example/42",
                github_url="https://github.com/octocat",
                team_id=None,
                custom_folders=None,
                now=now,
            )
        )

    def test_assignment_written_on_insert_only(self):
        now = datetime.now(timezone.utc)
        collection = create_mock_collection(
            find_one_and_update={"_id": "existing", "name": "octocat", "github_id": 42}
        )
        repo = _repo(collection)

        self._call(repo, now)

        args, kwargs = collection.find_one_and_update.call_args
        query, update = args
        assert query == {"github_id": 42}
        assert set(update["$set"]) == {"name", "github_login", "avatar_url", "github_url", "updated_at"}
        assert set(update["$setOnInsert"]) == {"_id", "team_id", "custom_folders", "created_at"}
        assert kwargs["upsert"] is True
        assert kwargs["return_document"] == ReturnDocument.AFTER

    def test_existing_document_is_not_created(self):
        now = datetime.now(timezone.utc)
        collection = create_mock_collection(
            find_one_and_update={
                "_id": "existing",
                "name": "octocat",
                "team_id": "team-1",
                "github_id": 42,
            }
        )
        repo = _repo(collection)

        user, was_created = self._call(repo, now)

        assert was_created is False
        assert user.id == "existing"
        assert user.team_id == "team-1"

    def test_new_document_is_created(self):
        now = datetime.now(timezone.utc)
        collection = create_mock_collection()

        async def echo_insert(query, update, upsert, return_document):
            return {**query, **update["$setOnInsert"], **update["$set"]}

        collection.find_one_and_update.side_effect = echo_insert
        repo = _repo(collection)

        user, was_created = self._call(repo, now)

        assert was_created is True
        assert user.github_id == 42
        assert user.team_id is None

    def test_concurrent_insert_retries_as_update(self):
        now = datetime.now(timezone.utc)
        existing = {"_id": "existing", "name": "octocat", "team_id": "team-1", "github_id": 42}
        collection = create_mock_collection()
        collection.find_one_and_update.side_effect = [DuplicateKeyError("dup github_id"), existing]
        repo = _repo(collection)

        user, was_created = self._call(repo, now)

        assert collection.find_one_and_update.call_count == 2
        assert was_created is False
        assert user.id == "existing"
        assert user.team_id == "team-1"
