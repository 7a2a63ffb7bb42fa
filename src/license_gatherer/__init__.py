"""License Gatherer - collect LICENSE files of installed Python packages.

This package gathers the license of every locally installed distribution
into a directory, for compliance auditing, and archives the source of
GPL-licensed packages.
"""

__version__ = "0.1.0"

from license_gatherer.models import (
    GatherReport,
    InstalledPackage,
    RegistryEntry,
    Resolution,
)

__all__ = [
    "__version__",
    "GatherReport",
    "InstalledPackage",
    "RegistryEntry",
    "Resolution",
]
