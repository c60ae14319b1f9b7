from typing import Optional

from pydantic import BaseModel, ConfigDict


class GitHubMember(BaseModel):
    """An organisation member as returned by ``GET /orgs/{org}/members``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    login: str
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None
