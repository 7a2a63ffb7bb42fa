"""License resolvers for the three license sources.

Local dist-info files are tried first, then the registry, then a guessed
GitHub URL.
"""

from license_gatherer.resolvers.base import BaseResolver
from license_gatherer.resolvers.github import GitHubResolver
from license_gatherer.resolvers.local import LocalResolver, is_gpl
from license_gatherer.resolvers.registry import LicenseDownloadError, RegistryResolver

__all__ = [
    "BaseResolver",
    "GitHubResolver",
    "LicenseDownloadError",
    "LocalResolver",
    "RegistryResolver",
    "is_gpl",
]
