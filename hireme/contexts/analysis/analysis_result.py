"""
Analysis Result Structures

Typed form of the job-match reply and the fixed fallback used when a request
fails. Callers check score/label (or is_error) instead of catching exceptions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from hireme.contexts.analysis.exceptions import AnalysisSchemaError

ERROR_LABEL = "Error"
ERROR_SUGGESTIONS = "Failed to analyze resume. Please try again."

T = TypeVar("T")


@dataclass
class AnalysisResult:
    """
    Job-match analysis returned by the hosted model.

    Attributes:
        score: Match score, intended 0-100 but not clamped
        ats_compatibility: Label, normally Low/Medium/High ("Error" for the fallback)
        keyword_matches: Job keywords found in the resume
        missing_keywords: Job keywords absent from the resume
        suggestions: Short improvement paragraph
    """

    score: int
    ats_compatibility: str
    keyword_matches: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    suggestions: str = ""

    @classmethod
    def error_result(cls) -> "AnalysisResult":
        """Fixed zero-score result substituted for any failed analysis."""
        return cls(score=0, ats_compatibility=ERROR_LABEL, suggestions=ERROR_SUGGESTIONS)

    @property
    def is_error(self) -> bool:
        return self.ats_compatibility == ERROR_LABEL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "atsCompatibility": self.ats_compatibility,
            "keywordMatches": list(self.keyword_matches),
            "missingKeywords": list(self.missing_keywords),
            "suggestions": self.suggestions,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AnalysisResult":
        """
        Validate a parsed reply against the requested schema.

        Raises:
            AnalysisSchemaError: If a field is missing or has the wrong type
        """
        missing = [
            key
            for key in ("score", "atsCompatibility", "keywordMatches", "missingKeywords", "suggestions")
            if key not in raw
        ]
        if missing:
            raise AnalysisSchemaError(f"Reply is missing fields: {', '.join(missing)}", raw)

        return cls(
            score=_as_int(raw["score"], raw),
            ats_compatibility=_as_str(raw["atsCompatibility"], "atsCompatibility", raw),
            keyword_matches=_as_str_list(raw["keywordMatches"], "keywordMatches", raw),
            missing_keywords=_as_str_list(raw["missingKeywords"], "missingKeywords", raw),
            suggestions=_as_str(raw["suggestions"], "suggestions", raw),
        )


def _as_int(value: Any, raw: Dict[str, Any]) -> int:
    # bool is an int subclass but never a valid score
    if isinstance(value, bool):
        raise AnalysisSchemaError(f"'score' must be an integer, got {value!r}", raw)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise AnalysisSchemaError(f"'score' must be an integer, got {value!r}", raw)


def _as_str(value: Any, key: str, raw: Dict[str, Any]) -> str:
    if not isinstance(value, str):
        raise AnalysisSchemaError(f"'{key}' must be a string, got {value!r}", raw)
    return value


def _as_str_list(value: Any, key: str, raw: Dict[str, Any]) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise AnalysisSchemaError(f"'{key}' must be a list of strings, got {value!r}", raw)
    return list(value)


@dataclass
class AnalysisOutcome(Generic[T]):
    """
    Value handed back to the caller plus why a fallback was used, if it was.

    Attributes:
        value: Result or fallback value
        error: Failure description (None on success)
        elapsed_s: Time spent on the request
    """

    value: T
    error: Optional[str] = None
    elapsed_s: float = 0.0

    @property
    def failed(self) -> bool:
        return self.error is not None
