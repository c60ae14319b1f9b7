from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from folderconfig.services.folders import normalize_folders


class UserBase(BaseModel):
    name: str = Field(..., description="Display name")
    team_id: Optional[str] = Field(None, description="Team to inherit folders from")
    custom_folders: Optional[List[str]] = Field(
        None, description="Per-user folders; when non-empty they replace the team's"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("team_id", mode="before")
    @classmethod
    def blank_team_is_none(cls, v):
        # The UI's "No Team" option posts an empty string
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return str(v)

    @field_validator("custom_folders")
    @classmethod
    def clean_custom_folders(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return normalize_folders(v) or None


class UserCreate(UserBase):
    github_id: Optional[int] = None
    github_login: Optional[str] = None
    avatar_url: Optional[str] = None
    github_url: Optional[str] = None


class UserUpdate(UserBase):
    """Full replacement of name, team and custom folders."""


class UserResponse(BaseModel):
    id: str
    name: str
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    custom_folders: Optional[List[str]] = None
    effective_folders: List[str] = []
    is_using_team_default: bool = True

    github_id: Optional[int] = None
    github_login: Optional[str] = None
    avatar_url: Optional[str] = None
    github_url: Optional[str] = None

    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
