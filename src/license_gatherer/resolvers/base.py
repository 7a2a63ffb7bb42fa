"""Base interface for license resolvers.

Resolvers obtain the license text of an installed package from one
source (local files, the registry, a guessed GitHub URL) and write it to
a destination file.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from license_gatherer.models import InstalledPackage


class BaseResolver(ABC):
    """Abstract base class for license resolvers."""

    @abstractmethod
    async def resolve(
        self, package: InstalledPackage, destination: Path
    ) -> Optional[Path]:
        """Write the package's license text to ``destination``.

        Args:
            package: Installed package to resolve.
            destination: File to write the license text to.

        Returns:
            The written path, or None if this source has no license for
            the package.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the resolver name for logging/debugging.

        Returns:
            Name like "local", "registry", "GitHub".
        """
        ...
