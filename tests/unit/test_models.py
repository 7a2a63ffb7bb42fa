from pathlib import Path

import pytest

from license_gatherer.models import (
    GatherReport,
    InstalledPackage,
    RegistryEntry,
    Resolution,
)


def _package(name: str = "test") -> InstalledPackage:
    return InstalledPackage(
        name=name,
        version="1.0",
        location=Path("/site"),
        metadata_dir=Path(f"/site/{name}-1.0.dist-info"),
    )


@pytest.mark.parametrize(
    "name, expected",
    [
        ("requests", "requests"),
        ("PyYAML", "pyyaml"),
        ("typing_extensions", "typing-extensions"),
        ("zope.interface", "zope-interface"),
        ("Foo__-.Bar", "foo-bar"),
    ],
)
def test_package_key_is_normalized(name, expected):
    """Test that package keys follow PEP 503 normalization."""
    assert _package(name).key == expected


def test_registry_entry_key_matches_package_key():
    """Test that registry and package keys compare case-insensitively."""
    entry = RegistryEntry(name="Typing-Extensions", url="https://example.com/LICENSE")
    assert entry.key == _package("typing_extensions").key


def test_installed_package_requirement():
    """Test that requirement pins the installed version."""
    assert _package("six").requirement == "six==1.0"


def test_record_missing_appends_to_missing():
    """Test that a missing outcome lands in the missing list."""
    report = GatherReport()
    package = _package()

    report.record(package, Resolution.MISSING)

    assert report.missing == [package]
    assert report.outcomes == {"test": Resolution.MISSING}
    assert report.license_files == {}
    assert not report.succeeded


def test_record_resolved_stores_license_file():
    """Test that a resolved outcome remembers the written file."""
    report = GatherReport()

    report.record(_package(), Resolution.LOCAL, Path("/out/test.LICENSE"))

    assert report.license_files == {"test": Path("/out/test.LICENSE")}
    assert report.succeeded


def test_record_twice_raises():
    """Test that a package cannot end in two outcomes."""
    report = GatherReport()
    report.record(_package(), Resolution.LOCAL, Path("/out/test.LICENSE"))

    with pytest.raises(ValueError, match="already resolved as local"):
        report.record(_package(), Resolution.MISSING)
