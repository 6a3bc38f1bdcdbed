"""
Editing context logger.

Provides logging interface for editing context with automatic [edit] prefix.
All editing modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[edit]"


def _log_info(message: str) -> None:
    """Log info message with [edit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [edit] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [edit] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [edit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level editing-specific logging helpers


def log_restore_result(result) -> None:
    """
    Log the outcome of restoring the resume store at startup.

    Args:
        result: LoadResult from ResumeStore.restore()
    """
    if result.source == "storage":
        data = result.data
        _log_success(
            f"Restored saved resume ({len(data.experience)} experience, "
            f"{len(data.education)} education, {len(data.skills)} skills)"
        )
    elif result.error:
        # Diagnostic only; the session continues with defaults
        _log_error(f"Failed to load saved data, starting from defaults: {result.error}")
    else:
        _log_info("No saved resume found, starting from defaults")


def log_item_change(action: str, list_name: str, item_id: str) -> None:
    """Log list item add/remove at debug level."""
    _log_debug(f"{action} {list_name} item {item_id}")
