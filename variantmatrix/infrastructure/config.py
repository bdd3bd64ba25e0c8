"""Engine configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from variantmatrix.domain.value_objects import MatchStrategy


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VARIANTMATRIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Combinations (None disables the guard)
    max_combinations: int | None = 10_000

    # Variants
    sku_separator: str = "-"
    match_strategy: MatchStrategy = MatchStrategy.POSITIONAL

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
