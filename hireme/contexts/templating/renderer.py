"""
Template Renderer

Pure rendering of ResumeData into an HTML document using one of three layout
strategies (classic, modern, minimal). The same data and selector always give
the same output.

Layout rules shared by every template:
- Empty optional fields (summary, linkedin, portfolio, and any empty contact
  field) are left out of the layout entirely
- A current position shows "Present" as its end date
- Skill levels are not displayed
"""

import time
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

from jinja2 import TemplateError

from hireme.contexts.editing.resume_data_structure import ResumeData
from hireme.contexts.templating.exceptions import TemplateRenderError, UnknownTemplateError
from hireme.contexts.templating.filters import PRESENT_LABEL
from hireme.contexts.templating.logger import _log_error, log_render
from hireme.contexts.templating.registries import TemplateRegistry


class TemplateType(str, Enum):
    """The three interchangeable resume layouts."""

    CLASSIC = "classic"
    MODERN = "modern"
    MINIMAL = "minimal"


DEFAULT_TEMPLATE = TemplateType.MODERN

_default_registry: TemplateRegistry = None


def get_default_registry() -> TemplateRegistry:
    """Shared registry so templates are parsed once per process."""
    global _default_registry
    if _default_registry is None:
        _default_registry = TemplateRegistry()
    return _default_registry


def parse_template_type(template: Union[TemplateType, str]) -> TemplateType:
    """
    Resolve a template selector.

    Raises:
        UnknownTemplateError: If template is not classic, modern or minimal
    """
    if isinstance(template, TemplateType):
        return template
    try:
        return TemplateType(str(template).lower())
    except ValueError:
        raise UnknownTemplateError(str(template), [t.value for t in TemplateType])


def _contact_items(data: ResumeData, contact_fields: List[str]) -> List[Tuple[str, str]]:
    """(field, value) pairs for the non-empty contact fields, in layout order."""
    items = []
    for field_name in contact_fields:
        value = getattr(data.personal_info, field_name)
        if value:
            items.append((field_name, value))
    return items


def build_render_context(
    data: ResumeData, layout: Dict[str, Any], config: Dict[str, Any]
) -> Dict[str, Any]:
    """Assemble the variables a resume template expects."""
    return {
        "resume": data,
        "info": data.personal_info,
        "contacts": _contact_items(data, layout["contact_fields"]),
        "headings": layout["headings"],
        "date_separator": layout["date_separator"],
        "contact_separator": layout.get("contact_separator", " | "),
        "present_label": config.get("present_label", PRESENT_LABEL),
        "icons": config["icons"],
    }


def _render(registry: TemplateRegistry, name: str, context: Dict[str, Any]) -> str:
    try:
        return registry.get_template(name).render(**context)
    except TemplateError as e:
        _log_error(f"Failed to render '{name}': {e}")
        raise TemplateRenderError(
            "Template rendering failed",
            template_name=name,
            template_path=registry.get_template_path(name),
            original_error=e,
        ) from e


def render_resume(
    data: ResumeData,
    template: Union[TemplateType, str] = DEFAULT_TEMPLATE,
    registry: TemplateRegistry = None,
) -> str:
    """
    Render the resume into an HTML fragment using the selected layout.

    Args:
        data: Aggregate to render
        template: "classic", "modern" or "minimal" (or a TemplateType)
        registry: Template registry (default: shared registry)

    Returns:
        HTML fragment (an <article> element)

    Raises:
        UnknownTemplateError: If template is not a known selector
        TemplateRenderError: If Jinja2 fails to render
    """
    template_type = parse_template_type(template)
    registry = registry or get_default_registry()

    start_time = time.perf_counter()
    context = build_render_context(data, registry.get_layout(template_type.value), registry.config)
    html = _render(registry, template_type.value, context)
    log_render(template_type.value, data, time.perf_counter() - start_time)

    return html


def render_analysis_report(result, registry: TemplateRegistry = None) -> str:
    """
    Render an analysis result as the HTML report shown after a job-match run.

    Args:
        result: AnalysisResult (fallback results render like any other)
        registry: Template registry (default: shared registry)

    Returns:
        HTML fragment (a <section> element)
    """
    registry = registry or get_default_registry()
    return _render(registry, "analysis_report", {"result": result})


def build_page(body: str, title: str, registry: TemplateRegistry = None) -> str:
    """Wrap a rendered fragment in a standalone HTML page with the print stylesheet."""
    registry = registry or get_default_registry()
    return _render(registry, "page", {"body": body, "title": title})
