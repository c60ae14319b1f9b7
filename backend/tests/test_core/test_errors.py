"""Tests for the domain error taxonomy."""

from folderconfig.core.errors import (
    Conflict,
    DirectoryError,
    DuplicateName,
    NotFound,
    StorageFailure,
    TeamHasMembers,
    ValidationError,
)


def test_status_codes():
    assert ValidationError("x").status_code == 400
    assert NotFound("Team").status_code == 404
    assert Conflict("x").status_code == 409
    assert DuplicateName("Dev").status_code == 409
    assert TeamHasMembers("t1", 2).status_code == 409
    assert StorageFailure("x").status_code == 500


def test_hierarchy():
    assert issubclass(DuplicateName, Conflict)
    assert issubclass(TeamHasMembers, Conflict)
    for cls in (ValidationError, NotFound, Conflict, StorageFailure):
        assert issubclass(cls, DirectoryError)


def test_not_found_message():
    err = NotFound("User", "u1")
    assert err.message == "User not found"
    assert err.resource_id == "u1"
    assert str(err) == "User not found"


def test_team_has_members_keeps_count():
    err = TeamHasMembers("t1", 3)
    assert err.member_count == 3
    assert "reassign" in err.message
