"""Report rendering using Jinja2.

Strict undefined checking turns a missing context variable into an error
instead of an empty string in the output.
"""

from typing import Any, Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from wagemap.logging import get_logger

from .report import WageReport

logger = get_logger(__name__, component="presentation")


class ReportTemplateError(Exception):
    """A report template could not be loaded or rendered."""


class ReportRenderer:
    """Renders wage reports from templates in ``wagemap.presentation``."""

    def __init__(
        self,
        template_dir: str = "report_templates",
        text_template: str = "wage_report.txt.j2",
    ):
        self.text_template_name = text_template
        self.env = Environment(
            loader=PackageLoader("wagemap.presentation", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_context(self, context: Dict[str, Any]) -> str:
        """Render the plain-text template with a prepared context.

        Raises:
            ReportTemplateError: If template loading or rendering fails
        """
        try:
            template = self.env.get_template(self.text_template_name)
            return template.render(context)
        except TemplateError as e:
            logger.error(
                f"Report rendering failed: {e}",
                extra={"event": "presentation.render.failed", "template": self.text_template_name},
            )
            raise ReportTemplateError(f"Template rendering failed: {e}") from e

    def render(self, report: WageReport) -> str:
        return self.render_context(report.to_context())
