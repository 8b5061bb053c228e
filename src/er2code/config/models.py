# src/er2code/config/models.py
"""
Pydantic configuration models
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from er2code.schema.exporters import RENDERERS

VALID_LOG_LEVELS = {"DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class FileLoggingConfig(BaseModel):
    """File logging configuration with template support"""

    enabled: bool = False
    path: str = "logs/er2code_{environment}_{date}.log"  # Keep as string template
    rotation: str = "10 MB"
    retention: str = "30 days"
    compression: str = "gz"

    @field_validator("path")
    @classmethod
    def validate_path_template(cls, v):
        """Validate that path template has valid placeholders"""
        valid_placeholders = {"{environment}", "{date}", "{datetime}"}
        found_placeholders = set(re.findall(r"\{[^}]+\}", v))

        invalid_placeholders = found_placeholders - valid_placeholders
        if invalid_placeholders:
            raise ValueError(
                f"Invalid placeholders in path: {invalid_placeholders}. "
                f"Valid placeholders: {valid_placeholders}"
            )
        return v

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v):
        if not re.match(r"^\d+\s*(MB|GB|KB|day|days|hour|hours)$", v, re.IGNORECASE):
            raise ValueError(
                "rotation must be in format like '10 MB', '1 GB', or '1 day'"
            )
        return v

    def get_resolved_path(self, environment: str) -> Path:
        """Resolve template placeholders in the path"""
        now = datetime.now()
        return Path(
            self.path.format(
                environment=environment,
                date=now.strftime("%Y%m%d"),
                datetime=now.strftime("%Y%m%d_%H%M%S"),
            )
        )


class ConsoleLoggingConfig(BaseModel):
    """Console logging configuration"""

    format: str = "simple"  # "simple" or "detailed"
    show_time: bool = True
    show_level: bool = True
    show_path: bool = False

    @field_validator("format")
    @classmethod
    def validate_format(cls, v):
        if v not in ["simple", "detailed"]:
            raise ValueError("format must be 'simple' or 'detailed'")
        return v


class LoggingConfig(BaseModel):
    """Complete logging configuration"""

    file: FileLoggingConfig = FileLoggingConfig()
    console: ConsoleLoggingConfig = ConsoleLoggingConfig()
    modules: Dict[str, str] = {}

    @field_validator("modules")
    @classmethod
    def validate_module_levels(cls, v):
        """Validate that log levels are valid"""
        for module, level in v.items():
            if level.upper() not in VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}' for module '{module}'. "
                    f"Valid levels: {VALID_LOG_LEVELS}"
                )
        return {module: level.upper() for module, level in v.items()}

    def get_log_config_for_environment(self, environment: str) -> Dict[str, Any]:
        """Resolved logging configuration for a specific environment"""
        return {
            "file": {
                "enabled": self.file.enabled,
                "path": self.file.get_resolved_path(environment)
                if self.file.enabled
                else None,
                "rotation": self.file.rotation,
                "retention": self.file.retention,
                "compression": self.file.compression,
            },
            "console": self.console.model_dump(),
            "modules": self.modules,
        }


class GlobalConfig(BaseModel):
    """Global configuration settings"""

    log_level: str = "INFO"
    logging: LoggingConfig = LoggingConfig()

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_valid(cls, v):
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}")
        return v.upper()

    def get_logging_config(self, environment: str) -> Dict[str, Any]:
        return self.logging.get_log_config_for_environment(environment)


class CodegenConfig(BaseModel):
    """Code generation settings"""

    target: str = "csharp"
    context_name: str = "AppDbContext"
    namespace: Optional[str] = None
    # None: print to stdout unless the CLI is given -o
    output_dir: Optional[Path] = None
    entities_filename: str = "Entities.cs"
    context_filename: str = "AppDbContext.cs"

    @field_validator("target")
    @classmethod
    def target_must_be_supported(cls, v):
        if v.lower() not in RENDERERS:
            raise ValueError(f"target must be one of {sorted(RENDERERS)}")
        return v.lower()

    @field_validator("context_name")
    @classmethod
    def context_name_must_be_identifier(cls, v):
        if not IDENTIFIER.match(v):
            raise ValueError(f"context_name must be a valid identifier, got '{v}'")
        return v

    @field_validator("namespace")
    @classmethod
    def namespace_must_be_dotted_identifier(cls, v):
        if not v:
            return None
        if not all(IDENTIFIER.match(part) for part in v.split(".")):
            raise ValueError(f"namespace must be a dotted identifier, got '{v}'")
        return v

    @field_validator("output_dir", mode="before")
    @classmethod
    def parse_output_dir(cls, v):
        if not v:
            return None
        return Path(v) if not isinstance(v, Path) else v

    def renderer_options(self) -> Dict[str, Any]:
        """Keyword arguments for the configured renderer"""
        return {"context_name": self.context_name, "namespace": self.namespace}


class AppConfig(BaseModel):
    """Main application configuration"""

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    codegen: CodegenConfig = Field(default_factory=CodegenConfig)

    model_config = ConfigDict(populate_by_name=True)
