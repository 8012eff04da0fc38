from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "BaseEnvSettings",
    "AppSettings",
    "app_settings",
    "PortSettings",
    "port_settings",
]

MIN_PORT = 1
MAX_PORT = 65535


class BaseEnvSettings(BaseSettings):
    """Base class for env settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


class AppSettings(BaseEnvSettings):
    """Application configuration settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        description="Logging level to use.",
        alias="LOG_LEVEL",
        default="INFO"
    )

    config_file: str = Field(
        default="devport.yaml",
        description="Project configuration file, relative paths resolve against the working directory.",
        alias="DEVPORT_CONFIG_FILE"
    )


class PortSettings(BaseEnvSettings):
    """
    Port allocation settings.

    The search base is shared by every probe that is not seeded with an
    explicit port. It is passed into PortProbe explicitly instead of being
    read from module state inside the probe.
    """

    default_port: int = Field(
        default=4200,
        description="Default port of the development server.",
        alias="PORT"
    )

    base_port: int = Field(
        default=49152,
        description="First port tried when a probe is not given an explicit port.",
        alias="DEVPORT_BASE_PORT"
    )

    max_port: int = Field(
        default=MAX_PORT,
        description="Last port tried before a scan is considered exhausted.",
        alias="DEVPORT_MAX_PORT"
    )

    max_rounds: Optional[int] = Field(
        default=None,
        description="Maximum number of live reload port resolution rounds. Unset means unbounded.",
        alias="DEVPORT_MAX_ROUNDS"
    )

    @field_validator("default_port")
    @classmethod
    def validate_default_port(cls, value: int) -> int:
        # 0 asks for a probed port
        if value != 0 and not MIN_PORT <= value <= MAX_PORT:
            raise ValueError(f"PORT must be between {MIN_PORT} and {MAX_PORT}, got {value}")
        return value

    @field_validator("base_port", "max_port")
    @classmethod
    def validate_port_range(cls, value: int) -> int:
        if not MIN_PORT <= value <= MAX_PORT:
            raise ValueError(f"Port must be between {MIN_PORT} and {MAX_PORT}, got {value}")
        return value

    @field_validator("max_rounds")
    @classmethod
    def validate_max_rounds(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError(f"DEVPORT_MAX_ROUNDS must be positive, got {value}")
        return value

    @model_validator(mode="after")
    def validate_base_below_max(self) -> "PortSettings":
        if self.base_port > self.max_port:
            raise ValueError(
                f"DEVPORT_BASE_PORT ({self.base_port}) must be <= DEVPORT_MAX_PORT ({self.max_port})"
            )
        return self


# Initialize settings instances
try:
    app_settings = AppSettings()
    port_settings = PortSettings()
except Exception as ex:
    print(f"Error loading configuration: {ex}")
    print("Please check your .env file and ensure all required variables are set.")
    raise
