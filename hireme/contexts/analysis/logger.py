"""
Analysis context logger.

Provides logging interface for analysis context with automatic [analysis] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[analysis]"


def _log_info(message: str) -> None:
    """Log info message with [analysis] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [analysis] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [analysis] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [analysis] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_request_start(operation: str, model: str, prompt: str) -> None:
    """Log start of a model request."""
    _log_info(f"Requesting {operation} from {model}")
    _log_debug(f"  Prompt length: {len(prompt)} chars")


def log_request_result(operation: str, outcome) -> None:
    """
    Log outcome of a model request.

    Args:
        operation: "summary", "improve" or "analysis"
        outcome: AnalysisOutcome returned by the client
    """
    if outcome.failed:
        _log_error(f"{operation} failed after {outcome.elapsed_s:.2f}s, using fallback: {outcome.error}")
    else:
        _log_success(f"{operation} succeeded ({outcome.elapsed_s:.2f}s)")
