"""
Configuration loader supporting separate environment files and env-var overrides
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console

from er2code.config.exceptions import (ConfigurationNotFoundError,
                                       ConfigurationValidationError)
from er2code.config.models import AppConfig

console = Console(stderr=True)

ENV_PREFIX = "ER2CODE"

SECTIONS = {"global": "GLOBAL", "codegen": "CODEGEN"}


class ConfigManager:
    """Loads base YAML, environment overrides, .env files and ER2CODE_* variables"""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def _log(self, message: str) -> None:
        if self.verbose:
            console.log(message)

    def load_config(
        self,
        config_path: Path | None = None,
        environment: str = "development",
        load_env_files: bool = True,
    ) -> AppConfig:
        """Load configuration; defaults are used when no base file exists"""
        self._log(f"[blue]Environment: {environment}[/blue]")

        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationNotFoundError(f"Configuration file not found: {config_path}")

        # 1. .env files feed the ER2CODE_* overrides
        if load_env_files:
            self._load_env_files(environment)

        # 2. Base configuration
        config_data = self._load_base_config(config_path)

        # 3. Environment-specific overrides
        env_config_data = self._load_environment_config(config_path, environment)
        if env_config_data:
            self._merge_configs(config_data, env_config_data)

        # 4. Environment variables
        self._apply_env_overrides(config_data)

        try:
            return AppConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(f"Invalid configuration: {e}") from e

    def _load_env_files(self, environment: str) -> None:
        for env_file in [
            Path(f".env.{environment}"),
            Path(".env"),
            Path("config") / ".env",
        ]:
            if env_file.exists():
                self._log(f"Loading variables from: [blue]{env_file}[/blue]")
                load_dotenv(env_file, override=False)

    def _find_base_config_file(self) -> Path | None:
        search_paths = [
            Path("config/er2code_config.yaml"),
            Path("config/config.yaml"),
            Path("~/.config/er2code/config.yaml").expanduser(),
        ]
        return next((path for path in search_paths if path.exists()), None)

    def _load_base_config(self, config_path: Path | None) -> dict:
        if config_path is None:
            config_path = self._find_base_config_file()
        if config_path is None:
            self._log("No base config found, using defaults")
            return {}

        self._log(f"Loading base config: {config_path}")
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _load_environment_config(
        self, base_config_path: Path | None, environment: str
    ) -> dict | None:
        base_dir = base_config_path.parent if base_config_path else Path("config")
        env_paths = [
            base_dir / "environments" / f"{environment}.yaml",
            base_dir / "environments" / f"{environment}.yml",
            base_dir / f"{environment}.yaml",
        ]

        for env_path in env_paths:
            if env_path.exists():
                self._log(f"Loading environment config: {env_path}")
                with open(env_path, "r", encoding="utf-8") as f:
                    return yaml.safe_load(f) or None
        return None

    def _merge_configs(self, base: dict, override: dict) -> None:
        """Recursively merge configuration dictionaries"""
        for key, value in override.items():
            if key.startswith("_"):  # Skip meta keys like _environment
                continue

            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value
                self._log(f"Override: {key} = {value}")

    def _apply_env_overrides(self, config: dict) -> None:
        """ER2CODE_<SECTION>_<KEY>=value; nested keys use a double underscore"""
        for section, name in SECTIONS.items():
            prefix = f"{ENV_PREFIX}_{name}_"
            for env_var, value in os.environ.items():
                if not env_var.startswith(prefix):
                    continue
                path = env_var[len(prefix) :].lower().split("__")
                self._set_nested_value(config.setdefault(section, {}), path, value)
                self._log(f"Env override: {env_var} = {value}")

    def _set_nested_value(self, config: dict, path: list[str], value: Any) -> None:
        current = config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value


# Global instance
_config_manager = ConfigManager()


def load_config(
    config_path: Path | None = None,
    environment: str = "development",
    load_env_files: bool = True,
    verbose: bool = False,
) -> AppConfig:
    """Load configuration with separate environment files"""
    _config_manager.verbose = verbose
    return _config_manager.load_config(config_path, environment, load_env_files)

