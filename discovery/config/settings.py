"""Settings for the discovery engine.

Environment-based configuration using pydantic-settings. Business thresholds
(edit distance, similarity cut-offs, rating shrinkage) are module constants and
deliberately not exposed here.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Discovery engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="DISCOVERY_",
        case_sensitive=False,
    )

    log_level: str = "INFO"
    json_logs: bool = True

    # Search
    search_default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    max_query_tokens: int = Field(default=32, ge=1)
    default_language: Literal["en", "ne"] = "en"

    # Suggestions
    suggestion_default_limit: int = Field(default=10, ge=1)
    max_suggestion_limit: int = Field(default=50, ge=1)

    # Recommendations
    recommendation_default_limit: int = Field(default=10, ge=1)
    max_recommendation_limit: int = Field(default=50, ge=1)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
