from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime, timezone
import uuid

class User(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str
    team_id: Optional[str] = None
    # None means "use the team's folders"; never stored as an empty list
    custom_folders: Optional[List[str]] = None

    # Set only for users synchronised from a GitHub organisation
    github_id: Optional[int] = None
    github_login: Optional[str] = None
    avatar_url: Optional[str] = None
    github_url: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
