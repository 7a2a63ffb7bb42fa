"""Source archival for GPL-licensed packages.

Copyleft licenses oblige distributors to make the source available, so
every GPL package is installed into its own directory under ``source/``.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import Optional

from license_gatherer.models import InstalledPackage

logger = logging.getLogger(__name__)


class SourceArchiver:
    """Installs packages into per-package target directories with pip.

    Attributes:
        source_dir: Directory holding one subdirectory per package.
        python: Interpreter used to run ``-m pip``.
    """

    def __init__(self, source_dir: Path, python: Optional[str] = None) -> None:
        self.source_dir = source_dir
        self.python = python or sys.executable

    def command(self, package: InstalledPackage) -> list[str]:
        """Return the pip command line for a package."""
        return [
            self.python,
            "-m",
            "pip",
            "install",
            "--target",
            str(self.source_dir / package.name),
            package.requirement,
        ]

    def ensure_dir(self) -> Path:
        """Create ``source_dir`` if it does not exist yet.

        Returns:
            ``source_dir``
        """
        self.source_dir.mkdir(parents=True, exist_ok=True)
        return self.source_dir

    def archive(self, package: InstalledPackage) -> Path:
        """Install a package into ``source_dir/<name>``.

        Returns:
            The target directory.

        Raises:
            subprocess.CalledProcessError: If pip fails.
        """
        self.ensure_dir()
        target = self.source_dir / package.name
        logger.debug("Running %s", " ".join(self.command(package)))
        subprocess.run(self.command(package), check=True)
        return target
