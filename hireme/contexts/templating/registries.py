"""
Templating Registries

Centralized registry for loading and caching Jinja2 templates and the layout
metadata that goes with them.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound
from omegaconf import OmegaConf

from hireme.contexts.templating.filters import format_date_range, score_band

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("HIREME_TEMPLATES_PATH", str(Path(__file__).parent / "templates"))
)
TEMPLATE_CONFIG_FILE = "templates.yaml"
TEMPLATE_SUFFIX = ".html.jinja"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 HTML templates.

    Templates are stored as {templates_path}/{name}.html.jinja; layout metadata
    (headings, date separators, contact order, icons) lives in templates.yaml
    next to them.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding the templates. Defaults to
                           HIREME_TEMPLATES_PATH from environment, or the
                           templates/ directory shipped with the package
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}
        self._config: Dict[str, Any] = None

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["date_range"] = format_date_range
        self.env.filters["score_band"] = score_band

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without suffix (e.g., 'classic')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}{TEMPLATE_SUFFIX}"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for '{name}' at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a template."""
        return self.templates_path / f"{name}{TEMPLATE_SUFFIX}"

    @property
    def config(self) -> Dict[str, Any]:
        """Layout metadata from templates.yaml, loaded once."""
        if self._config is None:
            config_path = self.templates_path / TEMPLATE_CONFIG_FILE
            if not config_path.exists():
                raise FileNotFoundError(f"Template config not found at {config_path}")
            self._config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
        return self._config

    def get_layout(self, name: str) -> Dict[str, Any]:
        """
        Get layout metadata for one resume template.

        Raises:
            KeyError: If templates.yaml has no entry for name
        """
        return self.config["templates"][name]

    def clear_cache(self):
        """Clear the template and config cache."""
        self._cache.clear()
        self._config = None

    def is_cached(self, name: str) -> bool:
        """Check if a template is in the cache."""
        return name in self._cache
