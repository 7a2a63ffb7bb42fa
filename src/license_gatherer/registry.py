"""License registry loading and lookup.

The registry is a user-maintained, unheaded CSV file with three columns::

    package_name,license_url,license_type

It lists the packages whose license cannot be found locally, together
with a URL to download the license text from.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from packaging.utils import canonicalize_name

from license_gatherer.models import RegistryEntry

logger = logging.getLogger(__name__)


class RegistryError(ValueError):
    """Raised when the registry file contains an invalid line."""


class Registry:
    """Known packages and their license URLs.

    Lookups are case-insensitive and treat ``-``, ``_`` and ``.`` as
    equivalent. When a package is listed twice the later entry wins.
    """

    def __init__(self, entries: Optional[list[RegistryEntry]] = None) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        for entry in entries or []:
            self.add(entry)

    def add(self, entry: RegistryEntry) -> None:
        """Add an entry, replacing any earlier entry for the same package."""
        previous = self._entries.get(entry.key)
        if previous is not None:
            logger.warning(
                "Registry entry for %s on line %d overrides line %d",
                entry.name,
                entry.line,
                previous.line,
            )
            del self._entries[entry.key]
        self._entries[entry.key] = entry

    def get(self, name: str) -> Optional[RegistryEntry]:
        """Return the entry for a package name, or None."""
        return self._entries.get(canonicalize_name(name))

    @property
    def entries(self) -> list[RegistryEntry]:
        """Return entries in file order."""
        return sorted(self._entries.values(), key=lambda e: e.line)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonicalize_name(name) in self._entries

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._entries)


def parse_line(line: str, line_num: int) -> Optional[RegistryEntry]:
    """Parse a single registry line.

    The line is split on the first two commas only, so the license type
    keeps any further commas verbatim. Quoting is not supported.

    Args:
        line: Raw line from the registry file.
        line_num: 1-based line number, used in error messages.

    Returns:
        RegistryEntry, or None for blank and comment lines.

    Raises:
        RegistryError: If the name or URL column is empty.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    columns = [column.strip() for column in line.split(",", 2)]
    columns += [""] * (3 - len(columns))
    name, url, license_type = columns

    if not name:
        raise RegistryError(f"line {line_num}: missing package name")
    if not url:
        raise RegistryError(f"line {line_num}: missing license URL for {name}")

    return RegistryEntry(name=name, url=url, license_type=license_type, line=line_num)


def load_registry(path: Path) -> Registry:
    """Load the registry CSV file.

    Args:
        path: Path to the registry file.

    Returns:
        Registry holding every entry in the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        RegistryError: If a line cannot be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Registry file not found: {path}")

    registry = Registry()
    with open(path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, start=1):
            try:
                entry = parse_line(line, line_num)
            except RegistryError as e:
                raise RegistryError(f"{path}: {e}") from e
            if entry is not None:
                registry.add(entry)

    logger.debug("Loaded %d registry entries from %s", len(registry), path)
    return registry
