"""Template rendering for match reports using Jinja2.

Templates live in the jobmatch.notifications.templates package directory and
are rendered with strict undefined checking so a missing variable fails
loudly instead of printing an empty field.
"""

import logging
from typing import Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from .models import NotificationTemplateError

logger = logging.getLogger(__name__)


def _yes_no(value) -> str:
    if value is None:
        return "unknown"
    return "yes" if value else "no"


def _or_dash(value) -> str:
    if value is None or value == "" or value == []:
        return "-"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


class TemplateRenderer:
    """Renders the plain-text match report.

    Templates are cached by Jinja2 for reuse across runs.
    """

    def __init__(
        self,
        template_dir: str = "templates",
        report_template: str = "match_report.txt.j2",
    ):
        """Initialize template renderer with a Jinja2 environment.

        Args:
            template_dir: Directory name within the jobmatch.notifications package
            report_template: Filename of the report template
        """
        self.report_template_name = report_template

        self.env = Environment(
            loader=PackageLoader("jobmatch.notifications", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.env.filters["yes_no"] = _yes_no
        self.env.filters["or_dash"] = _or_dash

        logger.debug(f"Initialized TemplateRenderer with templates from {template_dir}")

    def render(self, context: Dict) -> str:
        """Render the report template.

        Raises:
            NotificationTemplateError: If rendering fails
        """
        try:
            template = self.env.get_template(self.report_template_name)
            return template.render(context)
        except TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            logger.error(error_msg, exc_info=True)
            raise NotificationTemplateError(error_msg) from e
