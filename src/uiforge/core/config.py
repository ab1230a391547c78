"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="UIFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Markup limits
    max_markup_size: int = Field(default=512 * 1024, gt=0, description="Max markup size (bytes)")
    max_markup_depth: int = Field(default=64, gt=0, description="Max element nesting depth")

    # Patching
    max_patch_ops: int = Field(default=100, gt=0, description="Max ops per patch request")

    # Design-inference oracle
    oracle_url: str = Field(default="", description="Oracle base URL (empty disables it)")
    oracle_timeout: float = Field(default=10.0, gt=0.0, description="Oracle call timeout (seconds)")
    breaker_fail_max: int = Field(default=5, gt=0, description="Failures before the breaker opens")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Breaker reset timeout (seconds)")

    # Code generation
    output_dir: str = Field(
        default="/src/components/generated", description="Prefix for generated file paths"
    )

    @property
    def oracle_enabled(self) -> bool:
        """Check if an oracle endpoint is configured."""
        return bool(self.oracle_url.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
