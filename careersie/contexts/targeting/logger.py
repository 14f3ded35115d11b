"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from careersie.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path, job_name: str = "") -> Path:
    """
    Setup logger for targeting context.

    Args:
        log_dir: Directory for this scoring session
        job_name: Job being matched against, recorded in provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="target",
        log_dir=log_dir,
        extra_provenance={"Job": job_name} if job_name else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
