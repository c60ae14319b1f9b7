from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Folder Configuration Tool"
    API_PREFIX: str = "/api"

    MONGODB_URL: str
    DATABASE_NAME: str = "folder_config"

    LOG_LEVEL: str = "INFO"

    # Comma separated in the environment
    CORS_ORIGINS: Union[str, List[str]] = Field(default="*")

    # GitHub organisation import
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TOKEN: str = ""
    GITHUB_ORG: str = ""
    SKIP_GITHUB_IMPORT: bool = False
    IMPORT_ON_STARTUP: bool = False

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def github_import_configured(self) -> bool:
        return bool(self.GITHUB_TOKEN and self.GITHUB_ORG) and not self.SKIP_GITHUB_IMPORT

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
