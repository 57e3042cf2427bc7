"""
Application Settings
===================

Converter settings and environment configuration using Pydantic Settings.
Values come from the environment or a local .env file.
"""

from typing import Optional
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Converter settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Figma HTML Converter", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )

    # Figma API Configuration
    figma_access_token: Optional[str] = Field(
        default=None,
        description="Figma personal access token",
        validation_alias=AliasChoices("FIGMA_ACCESS_TOKEN", "FIGMA_HTML_FIGMA_ACCESS_TOKEN"),
    )
    figma_api_base_url: str = Field(
        default="https://api.figma.com/v1", description="Figma REST API base URL"
    )
    request_timeout: int = Field(default=30, gt=0, description="HTTP timeout in seconds")

    # Output Configuration
    output_dir: Path = Field(default=Path("./output"), description="Output directory path")
    html_filename: str = Field(default="index.html", description="Generated document filename")
    css_filename: str = Field(default="styles.css", description="Generated stylesheet filename")

    # Conversion Configuration
    class_prefix: str = Field(default="figma-node", description="Prefix for generated class names")
    max_tree_depth: int = Field(default=256, gt=0, description="Maximum scene tree depth")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("class_prefix")
    @classmethod
    def validate_class_prefix(cls, v: str) -> str:
        """Class prefix must be a usable CSS identifier start."""
        v = v.strip()
        if not v or not (v[0].isalpha() or v[0] in "-_"):
            raise ValueError("Class prefix must start with a letter, '-' or '_'")
        return v

    @property
    def has_access_token(self) -> bool:
        """Whether a usable access token is configured."""
        return bool(self.figma_access_token) and self.figma_access_token != "your_token_here"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="FIGMA_HTML_",
        extra="ignore",
        populate_by_name=True,
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
