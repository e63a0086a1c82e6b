"""Configuration settings for the meal catalog browser"""

from pathlib import Path

from pydantic import field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = ConfigDict(
        env_file="../.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # MealDB settings
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    mealdb_timeout: int = 30  # seconds

    # Aggregation settings
    aggregate_max_categories: int = 10
    category_member_limit: int = 5
    aggregate_max_concurrency: int = 10

    # View settings
    default_search_term: str = "Arrabiata"
    log_level: str = "INFO"
    collation_locale: str = ""  # empty uses the environment locale

    @field_validator('mealdb_base_url')
    @classmethod
    def validate_mealdb_url(cls, v):
        """Ensure MealDB URL is properly formatted"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('MealDB URL must start with http:// or https://')
        return v.rstrip('/')

    @field_validator('aggregate_max_categories', 'category_member_limit', 'aggregate_max_concurrency')
    @classmethod
    def validate_positive(cls, v):
        """Fan-out bounds must allow at least one item"""
        if v < 1:
            raise ValueError('Fan-out limits must be at least 1')
        return v

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Load from .env file in project root if it exists
        env_file = Path(__file__).parent.parent / ".env"
        if env_file.exists():
            from dotenv import load_dotenv
            load_dotenv(env_file)


# Global settings instance
settings = Settings()
