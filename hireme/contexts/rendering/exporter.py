"""
Print Export Module

Writes a rendered resume (or analysis report) as a standalone HTML page with
the print stylesheet embedded, then hands it to the system browser, where the
user prints to PDF. Rendering itself lives in the templating context.
"""

import time
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from hireme.contexts.editing.resume_data_structure import ResumeData
from hireme.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_info,
    log_export_result,
    log_export_start,
)
from hireme.contexts.templating.registries import TemplateRegistry
from hireme.contexts.templating.renderer import (
    DEFAULT_TEMPLATE,
    TemplateType,
    build_page,
    parse_template_type,
    render_analysis_report,
    render_resume,
)
from hireme.utils.errors import HireMeError

DEFAULT_TITLE = "Resume"


@dataclass
class ExportResult:
    """
    Result of writing a printable page.

    Attributes:
        success: Whether the page was written
        output_path: Path to the written page (None if failed)
        template: Layout used
        size_bytes: Size of the written page
        error: Failure description (None on success)
    """

    success: bool
    output_path: Optional[Path] = None
    template: Optional[str] = None
    size_bytes: int = 0
    error: Optional[str] = None


def page_title(data: ResumeData) -> str:
    """Browser title for the page; the print dialog uses it as the default file name."""
    name = data.personal_info.full_name.strip()
    return f"{name} - {DEFAULT_TITLE}" if name else DEFAULT_TITLE


def _write_page(html: str, output_path: Path) -> int:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    return output_path.stat().st_size


def export_resume(
    data: ResumeData,
    template: Union[TemplateType, str] = DEFAULT_TEMPLATE,
    output_path: Path = Path("resume.html"),
    registry: TemplateRegistry = None,
) -> ExportResult:
    """
    Render the resume and write it as a standalone printable page.

    Unknown template selectors raise before anything is written; rendering and
    file-system failures are reported in the result.

    Args:
        data: Aggregate to export
        template: "classic", "modern" or "minimal"
        output_path: Destination .html file
        registry: Template registry (default: shared registry)

    Returns:
        ExportResult

    Raises:
        UnknownTemplateError: If template is not a known selector
    """
    template_type = parse_template_type(template)
    output_path = Path(output_path)
    log_export_start(template_type.value, output_path)

    start_time = time.perf_counter()
    try:
        body = render_resume(data, template_type, registry=registry)
        html = build_page(body, page_title(data), registry=registry)
        size = _write_page(html, output_path)
        result = ExportResult(
            success=True,
            output_path=output_path,
            template=template_type.value,
            size_bytes=size,
        )
    except (HireMeError, OSError) as e:
        result = ExportResult(success=False, template=template_type.value, error=str(e))

    log_export_result(result, time.perf_counter() - start_time)
    return result


def export_analysis_report(
    result, output_path: Path, registry: TemplateRegistry = None
) -> ExportResult:
    """
    Write an analysis result as a standalone page.

    Args:
        result: AnalysisResult (fallback results export like any other)
        output_path: Destination .html file
        registry: Template registry (default: shared registry)

    Returns:
        ExportResult (template is None)
    """
    output_path = Path(output_path)
    start_time = time.perf_counter()
    try:
        html = build_page(render_analysis_report(result, registry=registry), "Resume Analysis", registry=registry)
        export = ExportResult(success=True, output_path=output_path, size_bytes=_write_page(html, output_path))
    except (HireMeError, OSError) as e:
        export = ExportResult(success=False, error=str(e))

    log_export_result(export, time.perf_counter() - start_time)
    return export


def open_for_print(path: Path) -> bool:
    """
    Open an exported page in the system browser for printing.

    Returns:
        True if a browser accepted the page
    """
    path = Path(path).resolve()
    if not path.exists():
        _log_error(f"Cannot open missing page: {path}")
        return False

    _log_info(f"Opening {path.name} in browser; use the print dialog to save as PDF")
    opened = webbrowser.open(path.as_uri())
    if not opened:
        _log_debug("  No browser available")
    return opened
