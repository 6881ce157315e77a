"""
Run logging: step banners and timed steps.
"""

import time
from contextlib import contextmanager

from .error_handling import get_logger


def log_step_banner(step_name: str, width: int = 60) -> None:
    """Log a clear demarcation banner for a workflow step."""
    logger = get_logger()
    sep = "=" * width
    logger.info(sep)
    logger.info(f"  {step_name}")
    logger.info(sep)


@contextmanager
def timed_step(step_name: str):
    """Context manager to time and log execution of a step."""
    logger = get_logger()
    log_step_banner(step_name)
    start_time = time.monotonic()
    logger.debug(f"[START] {step_name}")
    try:
        yield
    finally:
        elapsed = time.monotonic() - start_time
        logger.debug(f"[END] {step_name} (took {elapsed:.2f}s)")
