"""Markdown reporter for summarizing a gathering run.

Renders a table of every installed package with the source its license
came from, using a Jinja2 template.
"""

from datetime import datetime
from importlib.resources import files
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, Template

from license_gatherer.models import GatherReport
from license_gatherer.reporters.base import BaseReporter


def _cell(text: str) -> str:
    """Reduce free text to a single Markdown table cell."""
    lines = text.strip().splitlines()
    return lines[0].strip().replace("|", "\\|") if lines else ""


class MarkdownReporter(BaseReporter):
    """Reporter that generates a Markdown license summary.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(self, template_path: Optional[Path] = None) -> None:
        """Initialize the Markdown reporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the default bundled template.
        """
        if template_path:
            env = Environment(
                loader=FileSystemLoader(template_path.parent),
                autoescape=False,
            )
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        """Load the default bundled Jinja2 template."""
        template_content = (
            files("license_gatherer.templates")
            .joinpath("summary.md.j2")
            .read_text(encoding="utf-8")
        )
        env = Environment(autoescape=False)
        return env.from_string(template_content)

    @staticmethod
    def rows(report: GatherReport) -> list[dict[str, Any]]:
        """Flatten a report into one row per installed package.

        The license type is the registry label when the package is
        registered, else its declared license.
        """
        registered = {entry.key: entry for entry in report.registered}
        gpl = {package.name for package in report.gpl}

        rows = []
        for package in report.installed:
            entry = registered.get(package.key)
            outcome = report.outcomes.get(package.name)
            license_file = report.license_files.get(package.name)
            rows.append(
                {
                    "name": package.name,
                    "version": package.version,
                    "outcome": outcome.value if outcome else "",
                    "license_type": _cell(
                        entry.license_type if entry else package.license
                    ),
                    "license_file": license_file.name if license_file else None,
                    "gpl": package.name in gpl,
                }
            )
        return rows

    def render(self, report: GatherReport) -> str:
        """Render a gathering report to Markdown.

        Args:
            report: Finished gathering report.

        Returns:
            Rendered Markdown document as a string.
        """
        return self.template.render(
            rows=self.rows(report),
            missing=[package.name for package in report.missing],
            gpl=[package.name for package in report.gpl],
            generated_at=datetime.now(),
        )

    @property
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            The string "markdown".
        """
        return "markdown"
