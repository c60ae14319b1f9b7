from typing import List

from fastapi import APIRouter, Depends, Response, status

from folderconfig.api import deps
from folderconfig.api.helpers.responses import (
    RESP_400_404_409,
    RESP_400_409,
    RESP_404,
    RESP_404_409,
)
from folderconfig.core.errors import NotFound
from folderconfig.schemas.team import TeamCreate, TeamResponse, TeamUpdate
from folderconfig.services.directory import DirectoryService

router = APIRouter()


@router.get("", response_model=List[TeamResponse])
async def read_teams(
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    List all teams, ordered by name.
    """
    teams = await directory.list_teams()
    return [TeamResponse.from_model(t) for t in teams]


@router.get("/{team_id}", response_model=TeamResponse, responses={**RESP_404})
async def read_team(
    team_id: str,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    Get a single team.
    """
    team = await directory.get_team(team_id)
    if team is None:
        raise NotFound("Team", team_id)
    return TeamResponse.from_model(team)


@router.post(
    "",
    response_model=TeamResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_400_409},
)
async def create_team(
    team_in: TeamCreate,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    Create a team with its default folders. Team names are unique.
    """
    team = await directory.create_team(team_in.name, team_in.folders)
    return TeamResponse.from_model(team)


@router.put("/{team_id}", response_model=TeamResponse, responses={**RESP_400_404_409})
async def update_team(
    team_id: str,
    team_in: TeamUpdate,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    Rename a team and replace its whole folder list.
    """
    team = await directory.update_team(team_id, team_in.name, team_in.folders)
    return TeamResponse.from_model(team)


@router.delete(
    "/{team_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**RESP_404_409},
)
async def delete_team(
    team_id: str,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    Delete a team. Fails with 409 while users are still assigned to it.
    """
    await directory.delete_team(team_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
