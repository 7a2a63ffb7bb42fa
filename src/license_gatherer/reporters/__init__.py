"""Output reporters for summarizing a gathering run."""

from license_gatherer.reporters.base import BaseReporter
from license_gatherer.reporters.markdown import MarkdownReporter

__all__ = ["BaseReporter", "MarkdownReporter"]
