from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from folderconfig.core import ensure_utc
from folderconfig.models.team import Team
from folderconfig.services.folders import normalize_folders


class TeamBase(BaseModel):
    name: str = Field(..., description="Unique team name")
    folders: List[str] = Field(..., description="Default folders granted to every member")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("folders")
    @classmethod
    def clean_folders(cls, v: List[str]) -> List[str]:
        return normalize_folders(v)


class TeamCreate(TeamBase):
    pass


class TeamUpdate(TeamBase):
    """Full replacement: the folder list sent replaces the stored one."""


class TeamResponse(BaseModel):
    id: str
    name: str
    folders: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, team: Team) -> "TeamResponse":
        return cls(
            id=team.id,
            name=team.name,
            folders=list(team.folders),
            created_at=ensure_utc(team.created_at),
            updated_at=ensure_utc(team.updated_at),
        )
