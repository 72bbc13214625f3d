from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    LOGGING_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    MATTERMOST_URL: Optional[str] = None
    MATTERMOST_USERNAME: Optional[str] = None
    MATTERMOST_PASSWORD: Optional[str] = None
    MATTERMOST_TEAM: Optional[str] = None

    # 60 is the server-side default per_page
    CHANNELS_PER_PAGE: int = 60
    POSTS_PER_PAGE: int = 60
    REQUEST_TIMEOUT: float = 30.0



settings = Settings()
