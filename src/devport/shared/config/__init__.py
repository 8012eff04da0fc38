from .exceptions import ConfigurationError
from .models import (
    DEFAULT_BASE_URL,
    EnvironmentConfig,
    ProjectConfig,
)
from .reader import ProjectConfigReader
