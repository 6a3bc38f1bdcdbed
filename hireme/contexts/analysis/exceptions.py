"""Custom exceptions for the analysis context."""

from typing import Any, Dict, Optional

from hireme.utils.errors import HireMeError


class MissingJobDescriptionError(HireMeError, ValueError):
    """
    Raised when job-match analysis is requested without a target job description.

    This is the one precondition checked before any network call. The shell
    disables the analysis trigger while the job description is empty, so a
    correctly wired caller never sees it.
    """

    def __init__(self, message: str = "Job Description is required for analysis."):
        super().__init__(message)


class AnalysisSchemaError(HireMeError, ValueError):
    """
    Raised when a model reply does not match the requested analysis schema.

    Only raised internally; the client turns it into the fallback result.

    Attributes:
        message: What did not match
        raw: The parsed reply
    """

    def __init__(self, message: str, raw: Optional[Dict[str, Any]] = None):
        self.message = message
        self.raw = raw
        super().__init__(message)
