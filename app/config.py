"""Application configuration"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Notion
    # Key and database id are left empty by default so the server still boots;
    # a missing value is reported at startup and surfaces as a Notion error.
    notion_api_key: str = ""
    notion_database_id: str = ""
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_timeout_seconds: float = 30.0

    # Application
    environment: str = "development"
    port: int = 8080
    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def notion_configured(self) -> bool:
        """True when both the integration key and the database id are set"""
        return bool(self.notion_api_key and self.notion_database_id)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
