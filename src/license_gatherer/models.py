"""Core data models for license_gatherer.

This module defines the data structures shared across the gathering
pipeline: installed packages, registry entries, resolution outcomes and
the per-run report that accumulates them.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from packaging.utils import canonicalize_name


@dataclass(frozen=True)
class InstalledPackage:
    """A distribution found in the local environment.

    Attributes:
        name: Package name as declared in its metadata.
        version: Installed version string.
        location: Site directory the package is installed into.
        metadata_dir: Path to the package's ``.dist-info`` or ``.egg-info``
            metadata.
        license: Declared license string (may be empty).
        homepage: Declared homepage URL, if any.
        project_urls: ``Project-URL`` entries keyed by label.
    """

    name: str
    version: str
    location: Path
    metadata_dir: Path
    license: str = ""
    homepage: Optional[str] = None
    project_urls: tuple[tuple[str, str], ...] = ()

    @property
    def key(self) -> str:
        """Return the PEP 503 normalized package name."""
        return canonicalize_name(self.name)

    @property
    def requirement(self) -> str:
        """Return a pinned requirement string like ``name==1.0``."""
        return f"{self.name}=={self.version}"


@dataclass(frozen=True)
class RegistryEntry:
    """One row of the license registry CSV.

    Attributes:
        name: Package name as written in the registry.
        url: URL to download the license text from.
        license_type: Free-form license label (e.g., "MIT").
        line: 1-based line number in the registry file.
    """

    name: str
    url: str
    license_type: str = ""
    line: int = 0

    @property
    def key(self) -> str:
        """Return the normalized package name."""
        return canonicalize_name(self.name)


class Resolution(str, Enum):
    """How a package's license was obtained."""

    LOCAL = "local"
    REGISTRY = "registry"
    GUESSED = "guessed"
    MISSING = "missing"


@dataclass
class GatherReport:
    """Accumulated state of a gathering run.

    Each list is built once during the pipeline and only read afterwards.

    Attributes:
        installed: Packages enumerated from the environment.
        registered: Registry entries loaded for this run.
        gpl: Packages whose declared license contains "GPL".
        remote: Packages without a local LICENSE file.
        not_registered: Remote packages with no registry entry.
        missing: Packages whose license could not be obtained.
        outcomes: Resolution outcome keyed by package name.
        license_files: Written LICENSE file keyed by package name.
    """

    installed: list[InstalledPackage] = field(default_factory=list)
    registered: list[RegistryEntry] = field(default_factory=list)
    gpl: list[InstalledPackage] = field(default_factory=list)
    remote: list[InstalledPackage] = field(default_factory=list)
    not_registered: list[InstalledPackage] = field(default_factory=list)
    missing: list[InstalledPackage] = field(default_factory=list)
    outcomes: dict[str, Resolution] = field(default_factory=dict)
    license_files: dict[str, Path] = field(default_factory=dict)

    def record(
        self,
        package: InstalledPackage,
        outcome: Resolution,
        license_file: Optional[Path] = None,
    ) -> None:
        """Record the final outcome for a package.

        Raises:
            ValueError: If the package already has an outcome.
        """
        if package.name in self.outcomes:
            raise ValueError(
                f"{package.name} already resolved as {self.outcomes[package.name].value}"
            )
        self.outcomes[package.name] = outcome
        if outcome is Resolution.MISSING:
            self.missing.append(package)
        elif license_file is not None:
            self.license_files[package.name] = license_file

    @property
    def succeeded(self) -> bool:
        """Return True if every package has a license."""
        return not self.missing
