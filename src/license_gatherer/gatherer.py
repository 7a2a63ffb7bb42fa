"""Sequential license gathering pipeline.

Resolution order for every installed package:

1. LICENSE files in the package's dist-info (or egg-info) directory.
2. The registry URL, if the package is listed.
3. A raw LICENSE file guessed from a GitHub homepage, if it is not.

Packages left without a license are collected as missing rather than
aborting the run. A registry URL that fails to download does abort it.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from license_gatherer.models import GatherReport, InstalledPackage, Resolution
from license_gatherer.registry import Registry
from license_gatherer.resolvers.github import GitHubResolver
from license_gatherer.resolvers.local import LocalResolver, is_gpl
from license_gatherer.resolvers.registry import RegistryResolver
from license_gatherer.scanners.base import BaseScanner
from license_gatherer.scanners.environment import EnvironmentScanner

logger = logging.getLogger(__name__)

LICENSE_SUFFIX = ".LICENSE"


class LicenseGatherer:
    """Collects a LICENSE file for every installed package.

    Attributes:
        registry: Loaded license registry.
        output_dir: Directory receiving ``<package>.LICENSE`` files.
        scanner: Scanner enumerating installed packages.
        local_resolver: Resolver for license files in the metadata directory.
        registry_resolver: Resolver for registry URLs.
        github_resolver: Resolver for guessed GitHub URLs.
        console: Console receiving progress messages.
    """

    def __init__(
        self,
        registry: Registry,
        output_dir: Path,
        scanner: Optional[BaseScanner] = None,
        local_resolver: Optional[LocalResolver] = None,
        registry_resolver: Optional[RegistryResolver] = None,
        github_resolver: Optional[GitHubResolver] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.registry = registry
        self.output_dir = output_dir
        self.scanner = scanner or EnvironmentScanner()
        self.local_resolver = local_resolver or LocalResolver()
        self.registry_resolver = registry_resolver or RegistryResolver(registry)
        self.github_resolver = github_resolver or GitHubResolver()
        self.console = console or Console()

    def license_path(self, package: InstalledPackage) -> Path:
        """Return the output LICENSE path for a package."""
        return self.output_dir / f"{package.name}{LICENSE_SUFFIX}"

    async def gather(self) -> GatherReport:
        """Run the pipeline.

        Returns:
            The report with one outcome per installed package.

        Raises:
            LicenseDownloadError: If a registry URL cannot be downloaded.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        report = GatherReport(
            installed=self.scanner.scan(),
            registered=self.registry.entries,
        )
        logger.info("Gathering licenses for %d packages", len(report.installed))

        self._copy_local(report)
        report.not_registered = [
            package for package in report.remote if package.name not in self.registry
        ]
        await self._download_registered(report)
        await self._guess_unregistered(report)

        logger.info(
            "Resolved %d/%d packages, %d missing",
            len(report.installed) - len(report.missing),
            len(report.installed),
            len(report.missing),
        )
        return report

    def _copy_local(self, report: GatherReport) -> None:
        """Copy local license files and flag GPL packages."""
        for package in report.installed:
            destination = self.license_path(package)
            license_files = self.local_resolver.find(package)
            if license_files:
                self.local_resolver.copy(license_files, destination)
                self.console.print(
                    f"License found: {', '.join(str(path) for path in license_files)}"
                )
                report.record(package, Resolution.LOCAL, destination)
            else:
                report.remote.append(package)

            if is_gpl(package):
                report.gpl.append(package)

    async def _download_registered(self, report: GatherReport) -> None:
        """Download registry licenses for remote packages, in registry order."""
        remote = {package.key: package for package in report.remote}
        for entry in report.registered:
            package = remote.get(entry.key)
            if package is None:
                continue

            self.console.print(
                f"Downloading license for {package.name} from {entry.url}"
            )
            destination = await self.registry_resolver.resolve(
                package, self.license_path(package)
            )
            report.record(package, Resolution.REGISTRY, destination)

    async def _guess_unregistered(self, report: GatherReport) -> None:
        """Try GitHub guesses for remote packages with no registry entry."""
        for package in report.not_registered:
            repository = self.github_resolver.repository_for(package)
            if repository is None:
                logger.debug("No GitHub URL for %s", package.name)
                report.record(package, Resolution.MISSING)
                continue

            destination = await self.github_resolver.resolve(
                package, self.license_path(package)
            )
            if destination is None:
                report.record(package, Resolution.MISSING)
                continue

            self.console.print(
                f"Downloaded license for {package.name} "
                f"by guessing github URL: {repository}"
            )
            report.record(package, Resolution.GUESSED, destination)

    async def close(self) -> None:
        """Close the HTTP sessions of the remote resolvers."""
        await self.registry_resolver.close()
        await self.github_resolver.close()

    async def __aenter__(self) -> "LicenseGatherer":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
