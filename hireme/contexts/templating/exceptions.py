"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Iterable, Optional

from hireme.utils.errors import HireMeError


class UnknownTemplateError(HireMeError, ValueError):
    """
    Exception raised when a template selector is not one of the known layouts.

    Attributes:
        template: The selector that was given
        valid_templates: Selectors that exist
    """

    def __init__(self, template: str, valid_templates: Iterable[str]):
        self.template = template
        self.valid_templates = list(valid_templates)
        super().__init__(
            f"Unknown template '{template}'. Valid templates: {', '.join(self.valid_templates)}"
        )


class TemplateRenderError(HireMeError):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Name: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
