"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render(template_name: str, data, elapsed_time: float) -> None:
    """Log a finished render at debug level."""
    _log_debug(
        f"Rendered '{template_name}' ({len(data.experience)} experience, "
        f"{len(data.education)} education, {len(data.skills)} skills) in {elapsed_time * 1000:.1f}ms"
    )
