# utils/decorators.py
import time
from functools import wraps

from loguru import logger


def log_timing(label: str):
    """Décorateur qui journalise la durée d'exécution de la fonction."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.debug(f"{label} took {elapsed_ms:.1f}ms")

        return wrapper

    return decorator
