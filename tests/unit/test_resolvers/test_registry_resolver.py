"""Tests for the registry license resolver."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from aioresponses import aioresponses

from license_gatherer.models import RegistryEntry
from license_gatherer.registry import Registry
from license_gatherer.resolvers.registry import LicenseDownloadError, RegistryResolver

LICENSE_URL = "https://example.com/licenses/PyYAML.txt"


@pytest.fixture
async def registry_resolver() -> AsyncGenerator[RegistryResolver, None]:
    """Return a RegistryResolver over a one-entry registry."""
    resolver = RegistryResolver(
        Registry([RegistryEntry(name="PyYAML", url=LICENSE_URL, license_type="MIT", line=1)])
    )
    yield resolver
    await resolver.close()


class TestRegistryResolver:
    """Test suite for RegistryResolver."""

    def test_resolver_name(self, registry_resolver: RegistryResolver):
        assert registry_resolver.name == "registry"

    async def test_downloads_registered_license(
        self, registry_resolver, make_package, tmp_path: Path
    ):
        package = make_package("pyyaml")
        destination = tmp_path / "pyyaml.LICENSE"

        with aioresponses() as m:
            m.get(LICENSE_URL, status=200, body="Copyright (c) 2017-2021 Ingy döt Net")
            result = await registry_resolver.resolve(package, destination)

        assert result == destination
        assert destination.read_text(encoding="utf-8") == (
            "Copyright (c) 2017-2021 Ingy döt Net"
        )

    async def test_unregistered_package(
        self, registry_resolver, make_package, tmp_path: Path
    ):
        package = make_package("requests")

        with aioresponses():
            result = await registry_resolver.resolve(package, tmp_path / "x.LICENSE")

        assert result is None

    async def test_http_error_raises(self, registry_resolver, make_package, tmp_path: Path):
        package = make_package("PyYAML")
        destination = tmp_path / "PyYAML.LICENSE"

        with aioresponses() as m:
            m.get(LICENSE_URL, status=404)
            with pytest.raises(LicenseDownloadError, match="HTTP 404") as exc_info:
                await registry_resolver.resolve(package, destination)

        assert exc_info.value.package == "PyYAML"
        assert exc_info.value.url == LICENSE_URL
        assert not destination.exists()

    async def test_connection_error_raises(
        self, registry_resolver, make_package, tmp_path: Path
    ):
        package = make_package("PyYAML")

        with aioresponses():
            with pytest.raises(LicenseDownloadError, match=LICENSE_URL):
                await registry_resolver.resolve(package, tmp_path / "PyYAML.LICENSE")
