"""GitHub license resolver.

Guesses a package's source repository from its homepage and downloads
the LICENSE file from the repository's raw content host.
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import Optional

import aiohttp

from license_gatherer.models import InstalledPackage
from license_gatherer.resolvers.http import HttpResolver

logger = logging.getLogger(__name__)

GITHUB_MARKER = "github.com/"

RAW_LICENSE_URL = "https://raw.githubusercontent.com/{repository}/{branch}/LICENSE"

DEFAULT_BRANCHES = ("master", "main")


class GitHubResolver(HttpResolver):
    """Best-effort resolver for packages hosted on GitHub.

    Only used for packages that have neither a local license file nor a
    registry entry. Every failure is absorbed: the package is simply left
    unresolved.

    Attributes:
        branches: Branch names to try, in order.
    """

    def __init__(self, branches: Optional[tuple[str, ...]] = None) -> None:
        """Initialize GitHubResolver.

        Args:
            branches: Branch names to try. Defaults to ``master`` then ``main``.
        """
        super().__init__()
        self.branches = tuple(branches) if branches else DEFAULT_BRANCHES

    @property
    def name(self) -> str:
        """Return the resolver name.

        Returns:
            "GitHub"
        """
        return "GitHub"

    @staticmethod
    def parse_repository(url: str) -> Optional[str]:
        """Extract ``owner/repo`` from a GitHub URL.

        Args:
            url: Any URL containing ``github.com/``.

        Returns:
            The repository path, or None if the URL does not name one.
        """
        if not url or GITHUB_MARKER not in url:
            return None

        path = url.split(GITHUB_MARKER, 1)[1]
        path = re.split(r"[?#]", path, maxsplit=1)[0]
        parts = [part for part in path.split("/") if part]
        if len(parts) < 2:
            return None

        owner, repo = parts[0], parts[1]
        if repo.endswith(".git"):
            repo = repo[:-4]
        if not repo:
            return None

        return f"{owner}/{repo}"

    def repository_for(self, package: InstalledPackage) -> Optional[str]:
        """Guess the GitHub repository of a package from its homepage.

        Other ``Project-URL`` entries are not consulted: a package with no
        GitHub homepage is left for the registry.

        Returns:
            ``owner/repo``, or None if the homepage does not point at GitHub.
        """
        if not package.homepage:
            return None
        return self.parse_repository(package.homepage)

    def candidate_urls(self, repository: str) -> list[str]:
        """Return the raw LICENSE URLs to try for a repository."""
        return [
            RAW_LICENSE_URL.format(repository=repository, branch=branch)
            for branch in self.branches
        ]

    async def resolve(
        self, package: InstalledPackage, destination: Path
    ) -> Optional[Path]:
        """Download the guessed LICENSE file of a package.

        Args:
            package: Installed package to resolve.
            destination: File to write.

        Returns:
            ``destination``, or None if no guess succeeded.
        """
        repository = self.repository_for(package)
        if repository is None:
            return None

        for url in self.candidate_urls(repository):
            try:
                body = await self.fetch(url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.debug("Guess %s failed for %s: %s", url, package.name, e)
                continue

            destination.write_bytes(body)
            return destination

        return None
