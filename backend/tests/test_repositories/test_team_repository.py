"""Tests for TeamRepository.

Tests query shapes and result mapping using mocked MongoDB.
"""

import asyncio
from datetime import datetime, timezone

from folderconfig.repositories.teams import TeamRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db


def _repo(collection):
    return TeamRepository(create_mock_db({"teams": collection}))


class TestExistsByName:
    def test_returns_true_when_exists(self):
        repo = _repo(create_mock_collection(count_documents=1))
        assert asyncio.run(repo.exists_by_name("Dev")) is True

    def test_returns_false_when_not_exists(self):
        repo = _repo(create_mock_collection(count_documents=0))
        assert asyncio.run(repo.exists_by_name("Dev")) is False

    def test_exclude_id_adds_ne_filter(self):
        collection = create_mock_collection(count_documents=0)
        repo = _repo(collection)

        asyncio.run(repo.exists_by_name("Dev", exclude_id="team-1"))

        collection.count_documents.assert_called_once_with(
            {"name": "Dev", "_id": {"$ne": "team-1"}}
        )


class TestListAll:
    def test_sorted_by_name_without_limit(self):
        docs = [
            {"_id": "t1", "name": "Alpha", "folders": []},
            {"_id": "t2", "name": "Beta", "folders": ["/B"]},
        ]
        collection = create_mock_collection(find=docs)
        repo = _repo(collection)

        result = asyncio.run(repo.list_all())

        collection.find.assert_called_once_with({})
        cursor = collection.find.return_value
        cursor.sort.assert_called_once_with("name", 1)
        cursor.limit.assert_not_called()
        cursor.to_list.assert_called_once_with(None)
        assert [t.name for t in result] == ["Alpha", "Beta"]


class TestFindByIds:
    def test_empty_ids_skip_query(self):
        collection = create_mock_collection()
        repo = _repo(collection)

        assert asyncio.run(repo.find_by_ids([])) == []
        collection.find.assert_not_called()

    def test_uses_in_filter(self):
        collection = create_mock_collection(find=[])
        repo = _repo(collection)

        asyncio.run(repo.find_by_ids(["t1", "t2"]))

        collection.find.assert_called_once_with({"_id": {"$in": ["t1", "t2"]}})


class TestReplace:
    def test_sets_name_folders_and_timestamp(self):
        collection = create_mock_collection()
        repo = _repo(collection)
        now = datetime.now(timezone.utc)

        result = asyncio.run(repo.replace("team-1", "Dev", ["/Code"], now))

        assert result is True
        collection.update_one.assert_called_once_with(
            {"_id": "team-1"},
            {"$set": {"name": "Dev", "folders": ["/Code"], "updated_at": now}},
        )

    def test_returns_false_when_no_match(self):
        repo = _repo(create_mock_collection(matched_count=0))
        now = datetime.now(timezone.utc)
        assert asyncio.run(repo.replace("missing", "Dev", [], now)) is False


class TestDelete:
    def test_returns_true_when_deleted(self):
        collection = create_mock_collection(deleted_count=1)
        repo = _repo(collection)

        assert asyncio.run(repo.delete("team-1")) is True
        collection.delete_one.assert_called_once_with({"_id": "team-1"})

    def test_returns_false_when_missing(self):
        repo = _repo(create_mock_collection(deleted_count=0))
        assert asyncio.run(repo.delete("missing")) is False


class TestCreate:
    def test_inserts_with_id_alias(self):
        from folderconfig.models.team import Team

        collection = create_mock_collection()
        repo = _repo(collection)
        team = Team(id="team-1", name="Dev", folders=["/Code"])

        asyncio.run(repo.create(team))

        inserted = collection.insert_one.call_args[0][0]
        assert inserted["_id"] == "team-1"
        assert inserted["folders"] == ["/Code"]
        assert "id" not in inserted
