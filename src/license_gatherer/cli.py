"""Command-line interface for license_gatherer.

Usage::

    license-gatherer third_party_licenses.csv /usr/licenses
"""

import asyncio
import logging
import subprocess
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from license_gatherer.archiver import SourceArchiver
from license_gatherer.gatherer import LicenseGatherer
from license_gatherer.models import GatherReport
from license_gatherer.registry import Registry, RegistryError, load_registry
from license_gatherer.reporters import MarkdownReporter
from license_gatherer.resolvers import GitHubResolver, LicenseDownloadError

app = typer.Typer(
    name="license-gatherer",
    help="Gather LICENSE files for the Python packages installed locally.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("license_gatherer")

SOURCE_DIR_NAME = "source"

# click reserves 2 for usage errors
EXIT_FAILURE = 1
EXIT_DOWNLOAD_FAILED = 3


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("license_gatherer").setLevel(level)


async def _run_gather(
    registry: Registry,
    output: Path,
    branches: Optional[list[str]],
) -> GatherReport:
    """Run the gathering pipeline and close its HTTP sessions."""
    github_resolver = GitHubResolver(branches=tuple(branches) if branches else None)
    async with LicenseGatherer(
        registry=registry,
        output_dir=output,
        github_resolver=github_resolver,
        console=console,
    ) as gatherer:
        return await gatherer.gather()


def _archive_sources(report: GatherReport, output: Path) -> None:
    """Install every GPL package into ``output/source/<name>``.

    Raises:
        subprocess.CalledProcessError: If pip fails for a package.
    """
    archiver = SourceArchiver(output / SOURCE_DIR_NAME)
    archiver.ensure_dir()
    for package in report.gpl:
        console.print(f"Downloading source of the GPL-licensed package: {package.name}")
        archiver.archive(package)


@app.command()
def gather(
    registry_path: Annotated[
        Path,
        typer.Argument(
            metavar="REGISTRY",
            help="License registry CSV (name,license_url,license_type)",
        ),
    ],
    output: Annotated[
        Path,
        typer.Argument(
            help="Directory to write <package>.LICENSE files to",
            file_okay=False,
        ),
    ],
    summary: Annotated[
        Optional[Path],
        typer.Option(
            "--summary",
            "-s",
            envvar="LICENSE_GATHERER_SUMMARY",
            help="Also write a Markdown summary of the run to this file",
        ),
    ] = None,
    template: Annotated[
        Optional[Path],
        typer.Option(
            "--template",
            "-t",
            help="Custom Jinja2 template for the summary",
            exists=True,
            readable=True,
        ),
    ] = None,
    branch: Annotated[
        Optional[list[str]],
        typer.Option(
            "--branch",
            "-b",
            envvar="LICENSE_GATHERER_BRANCH",
            help="Branch to try when guessing GitHub LICENSE URLs (repeatable)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Gather license files of locally installed Python packages.

    Licenses are taken from the package's metadata directory, then from
    the registry, then guessed from a GitHub homepage. GPL packages have
    their source installed under OUTPUT/source/.

    Exit codes:
        0 - Every package has a license
        1 - Packages are missing from the registry, or the registry is invalid
        2 - Invalid command-line usage
        3 - A registry URL could not be downloaded
    """
    _setup_logging(verbose)

    try:
        registry = load_registry(registry_path)
    except (FileNotFoundError, RegistryError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=EXIT_FAILURE)

    try:
        report = asyncio.run(_run_gather(registry, output, branch))
    except LicenseDownloadError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=EXIT_DOWNLOAD_FAILED)

    resolved_count = len(report.installed) - len(report.missing)
    console.print(
        f"Resolved licenses for [bold]{resolved_count}[/bold]/"
        f"{len(report.installed)} packages"
    )

    if summary:
        MarkdownReporter(template_path=template).write(report, summary)
        console.print(f"[green]Generated:[/green] {summary}")
    elif template:
        console.print(
            "[yellow]Warning: --template has no effect without --summary[/yellow]"
        )

    if report.missing:
        console.print("The following packages are not found for licenses tracking.")
        console.print(f"Please add an entry in {registry_path} for each of them.")
        console.print(" ".join(package.name for package in report.missing))
        raise typer.Exit(code=EXIT_FAILURE)

    try:
        _archive_sources(report, output)
    except subprocess.CalledProcessError as e:
        err_console.print(f"[red]Error:[/red] pip failed with exit code {e.returncode}")
        raise typer.Exit(code=e.returncode or EXIT_FAILURE)

    raise typer.Exit(code=0)


if __name__ == "__main__":
    app()
