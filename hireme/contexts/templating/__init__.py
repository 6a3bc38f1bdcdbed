"""
Templating Context

Responsibilities:
- Manages the HTML template system (classic, modern, minimal)
- Renders ResumeData into a deterministic HTML document
- Renders the job-match analysis report
- Applies shared layout rules (omit empty optional fields, "Present" end dates)

Owns: Layout strategies, template metadata (templates/templates.yaml)
Never: Modifies resume data
"""

from hireme.contexts.templating.exceptions import TemplateRenderError, UnknownTemplateError
from hireme.contexts.templating.filters import format_date_range, score_band
from hireme.contexts.templating.registries import TemplateRegistry
from hireme.contexts.templating.renderer import (
    DEFAULT_TEMPLATE,
    TemplateType,
    build_page,
    parse_template_type,
    render_analysis_report,
    render_resume,
)

__all__ = [
    "TemplateType",
    "DEFAULT_TEMPLATE",
    "TemplateRegistry",
    "render_resume",
    "render_analysis_report",
    "build_page",
    "parse_template_type",
    "format_date_range",
    "score_band",
    "TemplateRenderError",
    "UnknownTemplateError",
]
