from typing import Dict

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "/"


class EnvironmentConfig(BaseModel):
    """Settings of a single build environment."""
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Path the application is served under"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        if not value:
            return DEFAULT_BASE_URL
        if not value.startswith("/"):
            raise ValueError(f"base_url must start with '/', got '{value}'")
        if not value.endswith("/"):
            value = f"{value}/"
        return value


class ProjectConfig(BaseModel):
    """Root project configuration, read from the 'devport' section."""
    environments: Dict[str, EnvironmentConfig] = Field(
        default_factory=dict,
        description="Environment name to environment settings"
    )

    def base_url(self, environment: str) -> str:
        """Return the base URL of an environment, '/' when not configured."""
        environment_config = self.environments.get(environment)
        if environment_config is None:
            return DEFAULT_BASE_URL
        return environment_config.base_url
