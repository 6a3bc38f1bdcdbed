"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(template: str, output_path: Path) -> None:
    """Log start of an export with context."""
    _log_info(f"Exporting {template} resume")
    _log_debug(f"  Output: {output_path}")


def log_export_result(result, elapsed_time: float) -> None:
    """
    Log export result.

    Args:
        result: ExportResult from export_resume()
        elapsed_time: Time taken to render and write the page
    """
    if result.success:
        _log_success(f"Export succeeded ({elapsed_time:.2f}s, {result.size_bytes} bytes)")
        _log_debug(f"  Page: {result.output_path}")
    else:
        _log_error(f"Export failed ({elapsed_time:.2f}s): {result.error}")
