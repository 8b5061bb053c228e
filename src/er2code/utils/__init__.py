"""
er2code utilities module.
"""

from er2code.utils.decorators import log_timing
from er2code.utils.logging import er2code_logger, setup_logging

__all__ = [
    # Logging
    "er2code_logger",
    "setup_logging",
    # Instrumentation
    "log_timing",
]
