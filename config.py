"""Application configuration."""
import os
from dataclasses import dataclass


@dataclass
class FetchConfig:
    """Settings for fetching referenced documents."""

    timeout: int = 30
    username: str = ""
    password: str = ""  # Read from env only
    user_agent: str = "schema-shapes/0.1.0"

    @classmethod
    def from_env(cls) -> "FetchConfig":
        """Load config from environment variables."""
        return cls(
            timeout=int(os.getenv("SCHEMA_SHAPES_FETCH_TIMEOUT", "30")),
            username=os.getenv("SCHEMA_SHAPES_HTTP_USER", ""),
            password=os.getenv("SCHEMA_SHAPES_HTTP_PASSWORD", ""),
        )


@dataclass
class AppConfig:
    """Application configuration."""

    log_level: str = "WARNING"
    fetch: FetchConfig = None

    def __post_init__(self):
        """Fill in default values."""
        if self.fetch is None:
            self.fetch = FetchConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            log_level=os.getenv("SCHEMA_SHAPES_LOG_LEVEL", "WARNING").upper(),
            fetch=FetchConfig.from_env(),
        )


# Global instance
app_config = AppConfig.from_env()
