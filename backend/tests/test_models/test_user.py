"""Tests for the User model."""

from folderconfig.models.user import User


class TestUserModel:
    def test_minimal(self):
        user = User(name="Alice")
        assert user.name == "Alice"
        assert user.team_id is None
        assert user.custom_folders is None
        assert user.github_id is None

    def test_github_fields(self):
        user = User(
            name="octocat",
            github_id=583231,
            github_login="octocat",
            avatar_url="https://avatars.githubusercontent.com/u/583231",
            github_url="https://github.com/octocat",
        )
        assert user.github_id == 583231
        assert user.github_login == "octocat"

    def test_id_alias(self):
        user = User(name="Alice")
        dumped = user.model_dump(by_alias=True)
        assert dumped["_id"] == user.id
        assert "id" not in dumped

    def test_from_document(self):
        doc = {
            "_id": "user-1",
            "name": "Bob",
            "team_id": "team-1",
            "custom_folders": ["/Tests"],
        }
        user = User(**doc)
        assert user.id == "user-1"
        assert user.team_id == "team-1"
        assert user.custom_folders == ["/Tests"]
