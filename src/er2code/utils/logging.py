# src/er2code/utils/logging.py
"""
Centralized logging configuration for the er2code application.
"""

from pathlib import Path
from typing import Dict, Optional

from loguru import logger
from rich.console import Console

from er2code.config import load_config

LEVEL_STYLES = {
    "ERROR": "bold red",
    "CRITICAL": "bold red",
    "WARNING": "bold orange1",
    "SUCCESS": "bold green",
}


def module_level_filter(default_level: str, modules_config: Dict[str, str]):
    """
    Loguru filter applying per-module levels.

    The longest module prefix matching the record name wins; records from
    other modules use the default level.
    """
    default_no = logger.level(default_level).no
    thresholds = sorted(
        ((module, logger.level(level).no) for module, level in modules_config.items()),
        key=lambda item: len(item[0]),
        reverse=True,
    )

    def level_filter(record) -> bool:
        name = record["name"] or ""
        threshold = next(
            (no for module, no in thresholds if name.startswith(module)), default_no
        )
        return record["level"].no >= threshold

    return level_filter


class Er2CodeLogger:
    """Centralized logger for the er2code application with config integration."""

    def __init__(self):
        # stdout is reserved for generated code
        self.console = Console(stderr=True)
        self._is_configured = False
        self._current_level = "INFO"
        self._log_file: Optional[Path] = None
        self._environment = "development"

    @property
    def is_configured(self) -> bool:
        return self._is_configured

    def setup(
        self,
        verbose: bool = False,
        log_file: Optional[Path] = None,
        environment: str = "development",
        config_path: Optional[Path] = None,
    ):
        """
        Setup logging from the application configuration.

        Args:
            verbose: Enable debug logging (overrides config)
            log_file: Optional custom log file path (overrides config)
            environment: Environment name for config loading
            config_path: Optional path to config file
        """
        if self._is_configured:
            return

        self._environment = environment

        app_config = load_config(environment=environment, config_path=config_path)
        logging_config = app_config.global_.get_logging_config(environment)

        log_level = "DEBUG" if verbose else app_config.global_.log_level
        self._current_level = log_level

        # Remove default loguru handler
        logger.remove()

        self._setup_console_logging(
            log_level, verbose, logging_config["console"], logging_config["modules"]
        )

        if log_file:
            self._log_file = Path(log_file)
            self._setup_file_logging(
                log_level,
                {"rotation": "10 MB", "retention": "30 days", "compression": "gz"},
            )
        elif logging_config["file"]["enabled"] and logging_config["file"]["path"]:
            self._log_file = logging_config["file"]["path"]
            self._setup_file_logging(log_level, logging_config["file"])

        self._is_configured = True

        logger.debug(
            f"er2code logging initialized (level={log_level}, env={environment}, "
            f"file={self._log_file})"
        )

    def _setup_console_logging(
        self,
        log_level: str,
        verbose: bool,
        console_config: Dict,
        modules_config: Optional[Dict[str, str]] = None,
    ):
        """Setup console logging based on configuration."""
        detailed = verbose or console_config.get("format", "simple") == "detailed"
        show_time = console_config.get("show_time", True)
        show_level = console_config.get("show_level", True)
        show_path = console_config.get("show_path", False)

        def rich_sink(message):
            record = message.record
            level = record["level"].name
            style = LEVEL_STYLES.get(level, "bold")
            colored_level = f"[{style}]{level}[/{style}]"
            time_part = f"[green]{record['time'].strftime('%H:%M:%S')}[/green]"

            if detailed:
                location = f"{record['name']}:{record['function']}"
                if show_path:
                    location += f":{record['line']}"
                formatted = f"{time_part} | {colored_level} | [cyan]{location}[/cyan] - {record['message']}"
            else:
                parts = []
                if show_time:
                    parts.append(time_part)
                if show_level:
                    parts.append(colored_level)
                parts.append(record["message"])
                formatted = " | ".join(parts)

            try:
                self.console.print(formatted, markup=True, highlight=False)
            except Exception:
                # Diagram text can contain brackets that break Rich markup
                self.console.print(
                    f"{record['time'].strftime('%H:%M:%S')} | {level} | {record['message']}",
                    markup=False,
                    highlight=False,
                )

        modules_config = modules_config or {}
        logger.add(
            rich_sink,
            format="{message}",
            level=min(logger.level(lvl).no for lvl in [log_level, *modules_config.values()]),
            filter=module_level_filter(log_level, modules_config),
            colorize=False,
            diagnose=verbose,
        )

    def _setup_file_logging(self, log_level: str, file_config: Dict):
        """Setup file logging based on configuration."""
        if not self._log_file:
            return

        self._log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(self._log_file),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=log_level,
            rotation=file_config.get("rotation", "10 MB"),
            retention=file_config.get("retention", "30 days"),
            compression=file_config.get("compression", "gz"),
            enqueue=True,
        )

    def reset(self):
        """Forget the current setup so that setup() runs again."""
        logger.remove()
        self._is_configured = False
        self._log_file = None

    def get_log_file_path(self) -> Optional[Path]:
        """Get the current log file path."""
        return self._log_file

    def show_log_info(self):
        """Display logging information."""
        self.console.print("[bold]Logging Configuration:[/bold]")
        self.console.print(f"  Environment: {self._environment}")
        self.console.print(f"  Level: {self._current_level}")
        self.console.print(f"  Log file: {self._log_file}")
        if self._log_file and self._log_file.exists():
            size_mb = self._log_file.stat().st_size / (1024 * 1024)
            self.console.print(f"  File size: {size_mb:.2f} MB")


# Global logger instance
er2code_logger = Er2CodeLogger()


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    environment: str = "development",
    config_path: Optional[Path] = None,
):
    """
    Setup logging for the er2code application.

    Args:
        verbose: Enable debug logging
        log_file: Optional custom log file path
        environment: Environment name
        config_path: Optional path to config file
    """
    er2code_logger.setup(
        verbose=verbose,
        log_file=log_file,
        environment=environment,
        config_path=config_path,
    )
