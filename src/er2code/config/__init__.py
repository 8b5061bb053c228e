# src/er2code/config/__init__.py
"""
Configuration system using Pydantic models loaded from YAML
"""

from er2code.config.exceptions import (ConfigurationError,
                                       ConfigurationNotFoundError,
                                       ConfigurationValidationError)
from er2code.config.loader import ConfigManager, load_config
from er2code.config.models import (AppConfig, CodegenConfig, GlobalConfig,
                                   LoggingConfig)

ENVIRONMENTS = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "test": "test",
}

__all__ = [
    "AppConfig",
    "GlobalConfig",
    "CodegenConfig",
    "LoggingConfig",
    "ConfigManager",
    "load_config",
    "ConfigurationError",
    "ConfigurationNotFoundError",
    "ConfigurationValidationError",
    "ENVIRONMENTS",
]
