"""
Application Shell

Wires the resume store, section editors, analysis client and renderer together
and carries the UI-only state: selected template, active tab, analysis report
visibility and in-flight requests. The command-line interface drives one shell
per invocation; other front ends can drive it the same way.

Analysis state machine:

    idle -> requesting -> succeeded | failed -> idle (on dismiss or next trigger)
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from dotenv import load_dotenv
from loguru import logger

from hireme.contexts.analysis.analysis_result import AnalysisResult
from hireme.contexts.analysis.client import AnalysisClient
from hireme.contexts.editing.section_editors import (
    EducationEditor,
    ExperienceEditor,
    JobDescriptionEditor,
    LoadingTracker,
    PersonalInfoEditor,
    SkillsEditor,
)
from hireme.contexts.editing.storage import DEFAULT_STORAGE_PATH, JsonFileStorage
from hireme.contexts.editing.store import LoadResult, ResumeStore
from hireme.contexts.editing.resume_data_structure import ResumeData
from hireme.contexts.rendering.exporter import ExportResult, export_resume, open_for_print
from hireme.contexts.templating.registries import TemplateRegistry
from hireme.contexts.templating.renderer import (
    DEFAULT_TEMPLATE,
    TemplateType,
    parse_template_type,
    render_analysis_report,
    render_resume,
)
from hireme.utils.logger import setup_logger

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", str(Path.home() / ".hireme" / "logs"))).expanduser()

CONTEXT_PREFIX = "[shell]"
ANALYSIS_LOADING_KEY = "analysis"


def setup_shell_logger(log_dir: Path, console_level: str = "WARNING") -> Path:
    """
    Setup logger for a shell session.

    Args:
        log_dir: Directory for this session
        console_level: Minimum level echoed to stderr

    Returns:
        Path to log file
    """
    return setup_logger(
        context_name="shell",
        log_dir=log_dir,
        extra_provenance={
            "Storage": os.getenv("HIREME_STORAGE_PATH", str(DEFAULT_STORAGE_PATH)),
            "LLM provider": os.getenv("LLM_PROVIDER", "gemini"),
        },
        console_level=console_level,
    )


def _log_info(message: str) -> None:
    """Log info message with [shell] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [shell] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [shell] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


class Tab(str, Enum):
    """Editor tabs, in display order."""

    PERSONAL = "personal"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    JOB_DESCRIPTION = "jd"


class AnalysisState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AppShell:
    """
    One editing session over a single resume store.

    All editors share one LoadingTracker, so any view can ask whether a given
    summary, bullet or analysis request is still in flight.
    """

    def __init__(
        self,
        store: ResumeStore,
        client: AnalysisClient = None,
        registry: TemplateRegistry = None,
        template: Union[TemplateType, str] = DEFAULT_TEMPLATE,
    ):
        self.store = store
        self.client = client
        self.registry = registry
        self.loading = LoadingTracker()

        self.personal = PersonalInfoEditor(store, client, self.loading)
        self.experience = ExperienceEditor(store, client, self.loading)
        self.education = EducationEditor(store)
        self.skills = SkillsEditor(store)
        self.job_description = JobDescriptionEditor(store)

        self.selected_template = parse_template_type(template)
        self.active_tab = Tab.PERSONAL
        self.analysis_state = AnalysisState.IDLE
        self.analysis_result: Optional[AnalysisResult] = None
        self.analysis_error: Optional[str] = None

        # Preview is re-rendered lazily after each change
        self._preview: Optional[Tuple[ResumeData, TemplateType, str]] = None
        self._unsubscribe = store.subscribe(self._on_change)

    @classmethod
    def open(
        cls,
        storage_path: Path = DEFAULT_STORAGE_PATH,
        client: AnalysisClient = None,
        template: Union[TemplateType, str] = DEFAULT_TEMPLATE,
    ) -> Tuple["AppShell", LoadResult]:
        """
        Restore the persisted resume and build a shell around it.

        Returns:
            Tuple of (AppShell, LoadResult)
        """
        store, result = ResumeStore.restore(JsonFileStorage(storage_path))
        if result.error:
            _log_warning(f"Started from empty resume: {result.error}")
        return cls(store, client=client, template=template), result

    @property
    def data(self) -> ResumeData:
        return self.store.data

    def _on_change(self, data: ResumeData) -> None:
        self._preview = None

    # --- View selection ---

    def select_template(self, template: Union[TemplateType, str]) -> TemplateType:
        self.selected_template = parse_template_type(template)
        _log_debug(f"Template: {self.selected_template.value}")
        return self.selected_template

    def select_tab(self, tab: Union[Tab, str]) -> Tab:
        self.active_tab = Tab(tab)
        return self.active_tab

    # --- Analysis ---

    @property
    def is_analyzing(self) -> bool:
        return self.loading.is_loading(ANALYSIS_LOADING_KEY)

    @property
    def can_analyze(self) -> bool:
        """Analysis needs a job description, a client, and no request in flight."""
        return (
            bool(self.data.target_job_description)
            and self.client is not None
            and not self.is_analyzing
        )

    @property
    def show_analysis(self) -> bool:
        """Whether the analysis report is open."""
        return self.analysis_state in (AnalysisState.SUCCEEDED, AnalysisState.FAILED)

    async def run_analysis(self) -> Optional[AnalysisResult]:
        """
        Score the current resume against its job description.

        Inert (returns None) when can_analyze is False. A failed request still
        opens the report, showing the fallback result.
        """
        if not self.can_analyze:
            _log_debug("Analysis trigger inert")
            return None

        self.analysis_state = AnalysisState.REQUESTING
        self.analysis_result = None
        self.analysis_error = None
        try:
            with self.loading.track(ANALYSIS_LOADING_KEY):
                outcome = await self.client.analyze_resume_outcome(self.data)
        except BaseException:
            self.analysis_state = AnalysisState.IDLE
            raise

        self.analysis_result = outcome.value
        self.analysis_error = outcome.error
        self.analysis_state = AnalysisState.FAILED if outcome.failed else AnalysisState.SUCCEEDED
        _log_info(f"Analysis {self.analysis_state.value}: score {outcome.value.score}")
        return outcome.value

    def dismiss_analysis(self) -> None:
        """Close the report and discard its result."""
        self.analysis_state = AnalysisState.IDLE
        self.analysis_result = None
        self.analysis_error = None

    # --- Output ---

    def render_preview(self) -> str:
        """Render the current snapshot with the selected template."""
        data, template = self.data, self.selected_template
        if self._preview is not None and self._preview[0] is data and self._preview[1] is template:
            return self._preview[2]

        html = render_resume(data, template, registry=self.registry)
        self._preview = (data, template, html)
        return html

    def render_analysis(self) -> Optional[str]:
        """Render the open analysis report, or None if no report is open."""
        if not self.show_analysis:
            return None
        return render_analysis_report(self.analysis_result, registry=self.registry)

    def export(self, output_path: Path, open_browser: bool = False) -> ExportResult:
        """Write the printable page for the selected template, optionally opening it."""
        result = export_resume(self.data, self.selected_template, output_path, registry=self.registry)
        if result.success and open_browser:
            open_for_print(result.output_path)
        return result

    def reset(self) -> None:
        """Replace the resume with empty defaults."""
        self.dismiss_analysis()
        self.store.set(ResumeData.empty())
        _log_info("Resume reset to defaults")

    def close(self):
        """Flush the store and detach from it."""
        self._unsubscribe()
        return self.store.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
