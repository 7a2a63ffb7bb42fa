"""Tests for the Markdown reporter."""

from pathlib import Path

import pytest

from license_gatherer.models import GatherReport, RegistryEntry, Resolution
from license_gatherer.reporters.markdown import MarkdownReporter


@pytest.fixture
def reporter() -> MarkdownReporter:
    """Create a MarkdownReporter instance."""
    return MarkdownReporter()


@pytest.fixture
def report(make_package, tmp_path: Path) -> GatherReport:
    """Return a finished report with one package per outcome."""
    local = make_package("local-pkg", license="GPL-3.0")
    registered = make_package("registered-pkg", version="2.0", license="MIT")
    missing = make_package("missing-pkg", license="BSD | MIT\n        second line")

    report = GatherReport(
        installed=[local, missing, registered],
        registered=[
            RegistryEntry(
                name="Registered_Pkg",
                url="https://example.com/LICENSE",
                license_type="Apache-2.0",
                line=1,
            )
        ],
        gpl=[local],
    )
    report.record(local, Resolution.LOCAL, tmp_path / "local-pkg.LICENSE")
    report.record(registered, Resolution.REGISTRY, tmp_path / "registered-pkg.LICENSE")
    report.record(missing, Resolution.MISSING)
    return report


def test_format_name(reporter: MarkdownReporter):
    assert reporter.format_name == "markdown"


def test_rows(report: GatherReport):
    rows = {row["name"]: row for row in MarkdownReporter.rows(report)}

    assert rows["local-pkg"] == {
        "name": "local-pkg",
        "version": "1.0.0",
        "outcome": "local",
        "license_type": "GPL-3.0",
        "license_file": "local-pkg.LICENSE",
        "gpl": True,
    }
    assert rows["registered-pkg"]["license_type"] == "Apache-2.0"
    assert rows["missing-pkg"]["license_file"] is None


def test_license_cell_is_single_line_and_escaped(report: GatherReport):
    rows = {row["name"]: row for row in MarkdownReporter.rows(report)}
    assert rows["missing-pkg"]["license_type"] == "BSD \\| MIT"


def test_render_table_and_sections(reporter: MarkdownReporter, report: GatherReport):
    output = reporter.render(report)

    assert "# Third-Party Licenses" in output
    assert "for 3 installed packages" in output
    assert (
        "| registered-pkg | 2.0 | registry | Apache-2.0 | registered-pkg.LICENSE |  |"
        in output
    )
    assert "| missing-pkg | 1.0.0 | missing | BSD \\| MIT | - |  |" in output
    assert "## Missing\n\n- missing-pkg" in output
    assert "- local-pkg: `source/local-pkg/`" in output


def test_render_without_missing_or_gpl(reporter: MarkdownReporter):
    output = reporter.render(GatherReport())

    assert "## Missing" not in output
    assert "## GPL packages" not in output


def test_custom_template(report: GatherReport, tmp_path: Path):
    template = tmp_path / "custom.j2"
    template.write_text("{% for row in rows %}{{ row.name }}={{ row.outcome }};{% endfor %}")

    output = MarkdownReporter(template_path=template).render(report)

    assert output == "local-pkg=local;missing-pkg=missing;registered-pkg=registry;"


def test_write_creates_parent(
    reporter: MarkdownReporter, report: GatherReport, tmp_path: Path
):
    path = tmp_path / "docs" / "licenses.md"

    reporter.write(report, path)

    assert "local-pkg" in path.read_text(encoding="utf-8")
