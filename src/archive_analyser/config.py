"""Configuration management."""
from typing import Literal

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings."""

    # Archive layout
    follower_file: str = Field(default="follower.js")
    following_file: str = Field(default="following.js")
    engagement_file_pattern: str = Field(
        default=r"^tweets?(-part\d+)?\.js$",
        description="Regex matched against file names of tweet archive parts"
    )

    # Wrapped-literal format: `window.YTD.tweets.part0 = [...]`
    wrapper_marker: str = Field(default=" = ")
    marker_max_offset: int = Field(default=100)

    # Reports
    output_dir: str = Field(default=".")
    report_extension: str = Field(default=".html")
    profile_url_template: str = Field(
        default="https://twitter.com/intent/user?user_id={account_id}",
        description="Deep link for an account, formatted with account_id"
    )

    # Diagnostics
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    class Config:
        env_prefix = "ARCHIVE_ANALYSER_"
        env_file = ".env"


def get_settings() -> Settings:
    """Get settings - environment variables take priority over .env (read via python-dotenv)."""
    return Settings()


settings = get_settings()
