"""Local license resolver.

Copies the LICENSE files a package installs into its ``.dist-info`` (or
``.egg-info``) directory.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from license_gatherer.models import InstalledPackage
from license_gatherer.resolvers.base import BaseResolver

logger = logging.getLogger(__name__)

LICENSE_FILE_PATTERN = re.compile(r"^(LICEN[CS]E|COPYING)", re.IGNORECASE)

GPL_MARKER = "GPL"


def is_gpl(package: InstalledPackage) -> bool:
    """Check whether a package declares a GPL-family license.

    A plain substring match on the declared license string, so LGPL and
    AGPL packages match too.
    """
    return GPL_MARKER in package.license


class LocalResolver(BaseResolver):
    """Resolver for LICENSE files shipped with an installed package.

    Looks at the top level of the metadata directory and, for wheels
    built to PEP 639, anywhere under its ``licenses/`` subdirectory.
    Multiple matches are concatenated into a single file.
    """

    @property
    def name(self) -> str:
        """Return the resolver name.

        Returns:
            "local"
        """
        return "local"

    def find(self, package: InstalledPackage) -> list[Path]:
        """Find the license files of a package.

        Args:
            package: Installed package to inspect.

        Returns:
            Sorted list of license file paths, empty if none exist.
        """
        metadata_dir = package.metadata_dir
        if not metadata_dir.is_dir():
            return []

        found = [
            path
            for path in metadata_dir.iterdir()
            if path.is_file() and LICENSE_FILE_PATTERN.match(path.name)
        ]

        licenses_dir = metadata_dir / "licenses"
        if licenses_dir.is_dir():
            found.extend(
                path
                for path in licenses_dir.rglob("*")
                if path.is_file() and LICENSE_FILE_PATTERN.match(path.name)
            )

        return sorted(found)

    async def resolve(
        self, package: InstalledPackage, destination: Path
    ) -> Optional[Path]:
        """Concatenate the package's license files into ``destination``.

        Args:
            package: Installed package to resolve.
            destination: File to write.

        Returns:
            ``destination``, or None if the package ships no license file.
        """
        license_files = self.find(package)
        if not license_files:
            logger.debug("No local license file for %s", package.name)
            return None

        return self.copy(license_files, destination)

    @staticmethod
    def copy(license_files: list[Path], destination: Path) -> Path:
        """Concatenate license files into ``destination``.

        Returns:
            ``destination``
        """
        with open(destination, "wb") as out:
            for license_file in license_files:
                out.write(license_file.read_bytes())
        return destination
