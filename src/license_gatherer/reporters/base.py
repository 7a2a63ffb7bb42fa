"""Base interface for output reporters.

Reporters render a summary document from a finished GatherReport.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from license_gatherer.models import GatherReport


class BaseReporter(ABC):
    """Abstract base class for output reporters."""

    @abstractmethod
    def render(self, report: GatherReport) -> str:
        """Render a gathering report.

        Args:
            report: Finished gathering report.

        Returns:
            Rendered output as a string.
        """
        ...

    def write(self, report: GatherReport, output_path: Path) -> None:
        """Render and write output to a file.

        Args:
            report: Finished gathering report.
            output_path: Path to write the output file.
        """
        content = self.render(report)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            Format name like "markdown".
        """
        ...
