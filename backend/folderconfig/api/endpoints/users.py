from typing import List

from fastapi import APIRouter, Depends, Response, status

from folderconfig.api import deps
from folderconfig.api.helpers.responses import RESP_400, RESP_400_404, RESP_404
from folderconfig.core.errors import NotFound
from folderconfig.schemas.user import UserCreate, UserResponse, UserUpdate
from folderconfig.services.directory import DirectoryService

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def read_users(
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    List all users with their team name and effective folders, ordered by name.
    """
    return await directory.list_users()


@router.get("/{user_id}", response_model=UserResponse, responses={**RESP_404})
async def read_user(
    user_id: str,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    user = await directory.get_user(user_id)
    if user is None:
        raise NotFound("User", user_id)
    return user


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_400, 200: {"description": "Existing GitHub user refreshed"}},
)
async def create_user(
    user_in: UserCreate,
    response: Response,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    Create a user.

    If ``githubId`` matches an existing user, that user's name and profile
    fields are refreshed instead (team and custom folders are kept) and the
    response status is 200.
    """
    user, was_created = await directory.create_user(user_in)
    if not was_created:
        response.status_code = status.HTTP_200_OK
    return user


@router.put("/{user_id}", response_model=UserResponse, responses={**RESP_400_404})
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    """
    Replace a user's name, team and custom folders.

    Sending no (or empty) ``customFolders`` puts the user back on the team's
    default folders.
    """
    return await directory.update_user(
        user_id, user_in.name, user_in.team_id, user_in.custom_folders
    )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**RESP_404},
)
async def delete_user(
    user_id: str,
    directory: DirectoryService = Depends(deps.get_directory_service),
):
    await directory.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
