"""
Analysis Client

Three one-shot requests to the hosted model, each with its own failure policy:

- generate_summary: fixed placeholder text on failure
- improve_description: the original text, unchanged, on failure
- analyze_resume: zero-score error result on failure; raises only when the
  job description is empty, before any network call

Every request runs the blocking provider call in a worker thread and is bounded
by a deadline, so a hung request ends as a failure instead of leaving its
loading flag set forever. Cancelling the awaiting task cancels the wait.
"""

import asyncio
import os
import time
from typing import Callable, Dict, Optional

from dotenv import load_dotenv

from hireme.contexts.analysis.analysis_result import AnalysisOutcome, AnalysisResult
from hireme.contexts.analysis.exceptions import MissingJobDescriptionError
from hireme.contexts.analysis.logger import log_request_result, log_request_start
from hireme.contexts.analysis.prompts import (
    ANALYSIS_RESPONSE_SCHEMA,
    analyst_system_prompt,
    build_analysis_prompt,
    build_improve_prompt,
    build_summary_prompt,
    writer_system_prompt,
)
from hireme.contexts.editing.resume_data_structure import ResumeData
from hireme.utils.llm import DEFAULT_PROVIDER, LLMProvider, get_provider, parse_json_response

load_dotenv()

SUMMARY_FALLBACK = "Could not generate summary. Please check your API key."

# (fast model, complex model) per provider; the complex one is used for analysis
DEFAULT_MODELS = {
    "gemini": ("gemini-2.5-flash", "gemini-2.5-pro"),
    "openai": ("gpt-4o-mini", "gpt-4o"),
    "anthropic": ("claude-3-5-haiku-latest", "claude-sonnet-4-20250514"),
}

LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "60"))


def _strip_quotes(text: str) -> str:
    """Remove one pair of wrapping quotes the model sometimes echoes back."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1].strip()
    return text


class AnalysisClient:
    """
    Wrapper around an LLM provider for the three resume operations.

    Providers are created lazily on first use and cached per model, so a
    missing API key surfaces as a failed request (and its fallback) rather
    than at construction time.
    """

    def __init__(
        self,
        provider_name: str = None,
        model: str = None,
        analysis_model: str = None,
        timeout_s: float = LLM_TIMEOUT_S,
        provider_factory: Callable[[str, str], LLMProvider] = get_provider,
    ):
        """
        Args:
            provider_name: "gemini", "openai" or "anthropic" (default: LLM_PROVIDER env var)
            model: Model for summary and bullet requests (default: LLM_MODEL env var,
                   then the provider's fast model)
            analysis_model: Model for job-match analysis (default: LLM_ANALYSIS_MODEL
                   env var, then the provider's complex model)
            timeout_s: Deadline for each request in seconds
            provider_factory: Callable (provider_name, model) -> LLMProvider
        """
        self.provider_name = (provider_name or DEFAULT_PROVIDER).lower()
        fast_default, complex_default = DEFAULT_MODELS.get(self.provider_name, (None, None))

        self.model = model or os.getenv("LLM_MODEL") or fast_default
        self.analysis_model = analysis_model or os.getenv("LLM_ANALYSIS_MODEL") or complex_default
        self.timeout_s = timeout_s
        self.provider_factory = provider_factory
        self._providers: Dict[Optional[str], LLMProvider] = {}

    def _get_provider(self, model: Optional[str]) -> LLMProvider:
        if model not in self._providers:
            self._providers[model] = self.provider_factory(self.provider_name, model)
        return self._providers[model]

    async def _request(
        self,
        operation: str,
        model: Optional[str],
        system_prompt: str,
        user_prompt: str,
        response_schema: Optional[dict] = None,
    ) -> str:
        """Run one provider call off the event loop under the deadline."""
        provider = self._get_provider(model)
        log_request_start(operation, provider.name, user_prompt)

        response = await asyncio.wait_for(
            asyncio.to_thread(provider.generate, system_prompt, user_prompt, response_schema),
            timeout=self.timeout_s,
        )
        return response.content or ""

    # --- Summary ---

    async def generate_summary_outcome(self, data: ResumeData) -> AnalysisOutcome[str]:
        """Summary request with the failure reason exposed."""
        start_time = time.perf_counter()
        try:
            text = await self._request(
                "summary", self.model, writer_system_prompt(), build_summary_prompt(data)
            )
            outcome = AnalysisOutcome(value=_strip_quotes(text.strip()))
        except Exception as e:
            outcome = AnalysisOutcome(value=SUMMARY_FALLBACK, error=_describe(e))

        outcome.elapsed_s = time.perf_counter() - start_time
        log_request_result("summary", outcome)
        return outcome

    async def generate_summary(self, data: ResumeData) -> str:
        """
        Draft an executive summary from experience, skills and target job.

        Returns:
            Trimmed summary ("" if the model replied with nothing), or
            SUMMARY_FALLBACK on any failure
        """
        return (await self.generate_summary_outcome(data)).value

    # --- Bullet improvement ---

    async def improve_description_outcome(self, text: str, role: str) -> AnalysisOutcome[str]:
        start_time = time.perf_counter()
        try:
            improved = await self._request(
                "improve", self.model, writer_system_prompt(), build_improve_prompt(text, role)
            )
            improved = _strip_quotes(improved.strip())
            outcome = AnalysisOutcome(value=improved or text)
        except Exception as e:
            outcome = AnalysisOutcome(value=text, error=_describe(e))

        outcome.elapsed_s = time.perf_counter() - start_time
        log_request_result("improve", outcome)
        return outcome

    async def improve_description(self, text: str, role: str) -> str:
        """
        Rewrite one description/bullet with action verbs and quantified results.

        Returns:
            Improved text, or text unchanged on failure or an empty reply
        """
        return (await self.improve_description_outcome(text, role)).value

    # --- Job-match analysis ---

    async def analyze_resume_outcome(self, data: ResumeData) -> AnalysisOutcome[AnalysisResult]:
        if not data.target_job_description:
            raise MissingJobDescriptionError()

        start_time = time.perf_counter()
        try:
            reply = await self._request(
                "analysis",
                self.analysis_model,
                analyst_system_prompt(),
                build_analysis_prompt(data),
                response_schema=ANALYSIS_RESPONSE_SCHEMA,
            )
            result = AnalysisResult.from_dict(parse_json_response(reply))
            outcome = AnalysisOutcome(value=result)
        except Exception as e:
            outcome = AnalysisOutcome(value=AnalysisResult.error_result(), error=_describe(e))

        outcome.elapsed_s = time.perf_counter() - start_time
        log_request_result("analysis", outcome)
        return outcome

    async def analyze_resume(self, data: ResumeData) -> AnalysisResult:
        """
        Score the resume against its target job description.

        Returns:
            AnalysisResult from the model, or AnalysisResult.error_result() on
            any failure (network, non-JSON reply, schema mismatch, timeout)

        Raises:
            MissingJobDescriptionError: If the job description is empty
        """
        return (await self.analyze_resume_outcome(data)).value


def _describe(error: Exception) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return "Request timed out"
    return f"{type(error).__name__}: {error}"
