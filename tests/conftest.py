"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import pytest

from license_gatherer.models import InstalledPackage
from license_gatherer.scanners.environment import EnvironmentScanner


@pytest.fixture
def site_packages(tmp_path: Path) -> Path:
    """Return an empty site-packages directory."""
    path = tmp_path / "site-packages"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) output directory."""
    return tmp_path / "licenses"


@pytest.fixture
def make_dist(site_packages: Path) -> Callable[..., Path]:
    """Return a factory writing a fake ``*.dist-info`` directory."""

    def _make_dist(
        name: str,
        version: str = "1.0.0",
        license: Optional[str] = None,
        homepage: Optional[str] = None,
        project_urls: tuple[tuple[str, str], ...] = (),
        classifiers: tuple[str, ...] = (),
        license_files: Optional[dict[str, str]] = None,
        editable: bool = False,
        site_dir: Optional[Path] = None,
    ) -> Path:
        dist_info = (site_dir or site_packages) / f"{name.replace('-', '_')}-{version}.dist-info"
        dist_info.mkdir(parents=True)

        lines = ["Metadata-Version: 2.1", f"Name: {name}", f"Version: {version}"]
        if license is not None:
            lines.append(f"License: {license}")
        if homepage is not None:
            lines.append(f"Home-page: {homepage}")
        lines.extend(f"Project-URL: {label}, {url}" for label, url in project_urls)
        lines.extend(f"Classifier: {classifier}" for classifier in classifiers)
        (dist_info / "METADATA").write_text("\n".join(lines) + "\n", encoding="utf-8")

        for filename, text in (license_files or {}).items():
            path = dist_info / filename
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")

        if editable:
            (dist_info / "direct_url.json").write_text(
                json.dumps({"url": "file:///src/project", "dir_info": {"editable": True}}),
                encoding="utf-8",
            )

        return dist_info

    return _make_dist


@pytest.fixture
def scanner(site_packages: Path) -> EnvironmentScanner:
    """Return a scanner restricted to the fake site-packages directory."""
    return EnvironmentScanner(paths=[site_packages])


@pytest.fixture
def make_package(make_dist, scanner: EnvironmentScanner) -> Callable[..., InstalledPackage]:
    """Return a factory creating a fake distribution and scanning it back."""

    def _make_package(name: str, **kwargs) -> InstalledPackage:
        make_dist(name, **kwargs)
        return next(p for p in scanner.scan() if p.name == name)

    return _make_package
