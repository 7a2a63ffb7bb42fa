"""Registry license resolver.

Downloads license files from the URLs listed in the license registry.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiohttp

from license_gatherer.models import InstalledPackage
from license_gatherer.registry import Registry
from license_gatherer.resolvers.http import HttpResolver

logger = logging.getLogger(__name__)


class LicenseDownloadError(RuntimeError):
    """Raised when a registry license URL cannot be downloaded."""

    def __init__(self, package: str, url: str, reason: str) -> None:
        super().__init__(f"Failed to download license for {package} from {url}: {reason}")
        self.package = package
        self.url = url


class RegistryResolver(HttpResolver):
    """Resolver that downloads licenses listed in the registry.

    Unlike the GitHub fallback, download failures are not absorbed: a
    registry URL that cannot be fetched raises LicenseDownloadError.

    Attributes:
        registry: The loaded license registry.
    """

    def __init__(self, registry: Registry) -> None:
        """Initialize RegistryResolver.

        Args:
            registry: Registry to look package URLs up in.
        """
        super().__init__()
        self.registry = registry

    @property
    def name(self) -> str:
        """Return the resolver name.

        Returns:
            "registry"
        """
        return "registry"

    async def resolve(
        self, package: InstalledPackage, destination: Path
    ) -> Optional[Path]:
        """Download the registry license for a package.

        Args:
            package: Installed package to resolve.
            destination: File to write.

        Returns:
            ``destination``, or None if the package is not in the registry.

        Raises:
            LicenseDownloadError: If the registry URL cannot be downloaded.
        """
        entry = self.registry.get(package.name)
        if entry is None:
            return None

        logger.debug("Fetching %s for %s", entry.url, package.name)
        try:
            body = await self.fetch(entry.url)
        except aiohttp.ClientResponseError as e:
            raise LicenseDownloadError(
                package.name, entry.url, f"HTTP {e.status}"
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise LicenseDownloadError(
                package.name, entry.url, str(e) or type(e).__name__
            ) from e

        destination.write_bytes(body)
        return destination
