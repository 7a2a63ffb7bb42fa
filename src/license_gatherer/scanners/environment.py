"""Scanner for the packages installed in a Python environment.

This scanner enumerates the ``*.dist-info`` and ``*.egg-info``
distributions in the site directories and filters them the way
``pip freeze --exclude-editable`` does.
"""

import importlib
import json
import logging
import sys
from importlib.metadata import Distribution, distributions
from pathlib import Path
from typing import Optional

from packaging.utils import canonicalize_name

from license_gatherer.models import InstalledPackage
from license_gatherer.scanners.base import BaseScanner

logger = logging.getLogger(__name__)

# pkg-resources is a Debian/Ubuntu packaging artefact
FREEZE_EXCLUDED = frozenset({"pip", "pkg-resources"})

# Hidden by pip freeze before Python 3.12
BUILD_BACKENDS = frozenset({"setuptools", "distribute", "wheel"})

HOMEPAGE_LABELS = frozenset({"homepage", "home", "home-page"})


def excluded_packages(
    version_info: Optional[tuple[int, ...]] = None,
) -> frozenset[str]:
    """Return the package keys ``pip freeze`` leaves out.

    Args:
        version_info: Interpreter version to decide for. Defaults to the
            running interpreter.
    """
    version_info = tuple(version_info or sys.version_info)
    if version_info[:2] < (3, 12):
        return FREEZE_EXCLUDED | BUILD_BACKENDS
    return FREEZE_EXCLUDED


class EnvironmentScanner(BaseScanner):
    """Scanner for distributions installed in site directories.

    Distributions are enumerated with ``importlib.metadata.distributions``,
    one site directory at a time. Editable installs and the packages
    ``pip freeze`` hides are skipped. When the same package appears in
    more than one site directory, the first one on the path wins.

    Attributes:
        paths: Site directories to scan. Defaults to the ``sys.path``
            entries that are directories.
    """

    def __init__(self, paths: Optional[list[Path]] = None) -> None:
        """Initialize the scanner.

        Args:
            paths: Optional explicit list of site directories.
        """
        self.paths = paths

    @property
    def source_name(self) -> str:
        """Return the human-readable name for this scanner's source type.

        Returns:
            "environment"
        """
        return "environment"

    def site_dirs(self) -> list[Path]:
        """Return the directories that will be scanned."""
        if self.paths is not None:
            return list(self.paths)
        return [Path(entry) for entry in sys.path if entry and Path(entry).is_dir()]

    def scan(self) -> list[InstalledPackage]:
        """Enumerate installed packages.

        Returns:
            InstalledPackage objects sorted case-insensitively by name.
        """
        # importlib.metadata caches directory listings by mtime
        importlib.invalidate_caches()

        excluded = excluded_packages()
        seen: set[str] = set()
        packages: list[InstalledPackage] = []

        for site_dir in self.site_dirs():
            found = distributions(path=[str(site_dir)])
            for dist in sorted(found, key=lambda d: self._metadata_path(d).name):
                package = self._read_package(site_dir, dist)
                if package is None or package.key in seen:
                    continue
                seen.add(package.key)

                if package.key in excluded:
                    logger.debug("Skipping excluded package %s", package.name)
                    continue

                packages.append(package)

        packages.sort(key=lambda p: p.name.lower())
        logger.debug("Found %d installed packages", len(packages))
        return packages

    @staticmethod
    def _metadata_path(dist: Distribution) -> Path:
        """Return the ``.dist-info`` or ``.egg-info`` path of a distribution."""
        # PathDistribution has no public accessor for its metadata location
        return Path(str(dist._path))

    @staticmethod
    def _has_metadata(metadata_path: Path) -> bool:
        """Check for a core metadata file (or a single-file ``.egg-info``)."""
        if metadata_path.is_file():
            return True
        return any(
            (metadata_path / filename).is_file() for filename in ("METADATA", "PKG-INFO")
        )

    def _read_package(
        self, site_dir: Path, dist: Distribution
    ) -> Optional[InstalledPackage]:
        """Build an InstalledPackage from a distribution.

        Returns:
            The package, or None if it is editable or has no usable metadata.
        """
        metadata_path = self._metadata_path(dist)
        if not self._has_metadata(metadata_path):
            logger.warning("Skipping %s: no metadata file", metadata_path)
            return None

        metadata = dist.metadata

        name = metadata.get("Name")
        if not name:
            logger.warning("Skipping %s: no Name in metadata", metadata_path)
            return None

        if self._is_editable(dist, name):
            logger.debug("Skipping editable install %s", name)
            return None

        project_urls = self._project_urls(metadata.get_all("Project-URL") or [])

        return InstalledPackage(
            name=name,
            version=metadata.get("Version") or "",
            location=site_dir,
            metadata_dir=metadata_path,
            license=self._declared_license(metadata),
            homepage=self._homepage(metadata.get("Home-page"), project_urls),
            project_urls=project_urls,
        )

    @staticmethod
    def _is_editable(dist: Distribution, name: str) -> bool:
        """Check the PEP 610 ``direct_url.json`` for an editable install."""
        raw = dist.read_text("direct_url.json")
        if not raw:
            return False
        try:
            direct_url = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("Ignoring malformed direct_url.json for %s", name)
            return False
        return bool(direct_url.get("dir_info", {}).get("editable", False))

    @staticmethod
    def _declared_license(metadata) -> str:
        """Return the declared license string.

        Prefers ``License-Expression``, then ``License``, then the
        ``License ::`` trove classifiers.
        """
        for header in ("License-Expression", "License"):
            value = (metadata.get(header) or "").strip()
            if value and value.upper() != "UNKNOWN":
                return value

        classifiers = [
            classifier.split("::", 1)[1].strip()
            for classifier in metadata.get_all("Classifier") or []
            if classifier.startswith("License ::")
        ]
        return "; ".join(classifiers)

    @staticmethod
    def _project_urls(entries: list[str]) -> tuple[tuple[str, str], ...]:
        """Parse ``Project-URL: Label, https://...`` headers."""
        urls = []
        for entry in entries:
            if "," not in entry:
                continue
            label, url = entry.split(",", 1)
            urls.append((label.strip(), url.strip()))
        return tuple(urls)

    @staticmethod
    def _homepage(
        home_page: Optional[str], project_urls: tuple[tuple[str, str], ...]
    ) -> Optional[str]:
        """Return ``Home-page`` or the ``Homepage`` project URL."""
        if home_page and home_page.strip().upper() != "UNKNOWN":
            return home_page.strip()

        for label, url in project_urls:
            if canonicalize_name(label.replace(" ", "")) in HOMEPAGE_LABELS:
                return url
        return None
