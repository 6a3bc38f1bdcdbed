"""
Analysis Context

Responsibilities:
- Builds prompts from resume data and the target job description
- Calls the hosted model (summary, bullet rewrite, job-match analysis)
- Parses the structured job-match reply into AnalysisResult
- Substitutes each operation's fallback on failure

Owns: Prompts, model calls, AnalysisResult
Never: Writes to the resume store (editors do that with the returned text)
"""

from hireme.contexts.analysis.analysis_result import AnalysisOutcome, AnalysisResult
from hireme.contexts.analysis.client import SUMMARY_FALLBACK, AnalysisClient
from hireme.contexts.analysis.exceptions import AnalysisSchemaError, MissingJobDescriptionError

__all__ = [
    "AnalysisClient",
    "AnalysisResult",
    "AnalysisOutcome",
    "SUMMARY_FALLBACK",
    "MissingJobDescriptionError",
    "AnalysisSchemaError",
]
