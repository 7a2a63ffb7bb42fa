"""Scanners for enumerating installed packages."""

from license_gatherer.scanners.base import BaseScanner
from license_gatherer.scanners.environment import EnvironmentScanner

__all__ = [
    "BaseScanner",
    "EnvironmentScanner",
]
