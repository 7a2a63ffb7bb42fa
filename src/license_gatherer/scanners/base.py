"""Base interface for installed-package scanners.

Scanners enumerate the distributions available in a Python environment
and describe each one as an InstalledPackage.
"""

from abc import ABC, abstractmethod

from license_gatherer.models import InstalledPackage


class BaseScanner(ABC):
    """Abstract base class for installed-package scanners."""

    @abstractmethod
    def scan(self) -> list[InstalledPackage]:
        """Enumerate installed packages.

        Returns:
            List of InstalledPackage objects, one per distribution.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for the scanned source.

        Returns:
            Name like "environment".
        """
        ...
