"""Configuration management for the upload validator"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in environment
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")

    # Template Configuration
    # False keeps the legacy behaviour: a rule whose pattern does not compile
    # simply has its pattern check disabled
    strict_patterns: bool = Field(default=False, alias="STRICT_PATTERNS")

    # Parsing Configuration
    default_delimiter: str = Field(default=",", alias="DEFAULT_DELIMITER")
    preview_rows: int = Field(default=10, alias="PREVIEW_ROWS")


# Global settings instance
settings = Settings()
