"""
CLI module for er2code.
"""

from er2code.cli.main import cli, generate, info, inspect, logs

__all__ = ["cli", "generate", "inspect", "info", "logs"]
