"""
Pytest configuration and shared fixtures for adcloak tests.

The fixtures build a fake plugin directory with a handful of assets and
settings that point the engine at it, an upload directory and a state
file, all under ``tmp_path``.
"""

from __future__ import annotations

import os
import random
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from adcloak.config.models import LoggingSettings, RelocationSettings, ScanSettings, Settings


def write_asset(root: Path, relative_path: str, mtime: int, content: str | None = None) -> Path:
    """Create a file under ``root`` with a fixed modification time."""
    path = root.joinpath(*relative_path.split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if content is not None else f"/* {relative_path} */", encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def asset_writer() -> Callable[..., Path]:
    """Expose :func:`write_asset` to test modules."""
    return write_asset


@pytest.fixture
def plugin_root(tmp_path: Path) -> Path:
    """Create a plugin directory holding one extension with assets.

    Layout (relative to the returned root)::

        advanced-ads/public/assets/js/advanced.js      tracked, allow-listed
        advanced-ads/public/assets/css/style.css       tracked, allow-listed dirs
        advanced-ads/modules/gadsense/public/gadsense.js
        advanced-ads/modules/gadsense/public/gadsense.css
        advanced-ads/modules/gadsense/public/logo.png  image, keeps its name
        advanced-ads/admin/admin.js                    excluded directory
        advanced-ads/vendor/lib.js                     excluded directory
        advanced-ads/readme.txt                        not an asset
        other-plugin/script.js                         outside the root pattern
    """
    root = tmp_path / "plugins"
    write_asset(root, "advanced-ads/public/assets/js/advanced.js", 1000)
    write_asset(root, "advanced-ads/public/assets/css/style.css", 1000)
    write_asset(root, "advanced-ads/modules/gadsense/public/gadsense.js", 1100)
    write_asset(root, "advanced-ads/modules/gadsense/public/gadsense.css", 1100)
    write_asset(root, "advanced-ads/modules/gadsense/public/logo.png", 1100)
    write_asset(root, "advanced-ads/admin/admin.js", 1200)
    write_asset(root, "advanced-ads/vendor/lib.js", 1200)
    write_asset(root, "advanced-ads/readme.txt", 1200)
    write_asset(root, "other-plugin/script.js", 1200)
    return root


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Create an empty, writable upload directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def make_settings(tmp_path: Path, plugin_root: Path, upload_dir: Path) -> Callable[..., Settings]:
    """Return a factory building settings for the fake plugin tree.

    Keyword arguments override fields of the ``scan`` and ``relocation``
    sections, e.g. ``make_settings(upload_dir=None)``.
    """

    def factory(**overrides: Any) -> Settings:
        scan_fields: dict[str, Any] = {"plugin_root": plugin_root}
        relocation_fields: dict[str, Any] = {
            "enabled": True,
            "upload_dir": upload_dir,
            "upload_url": "https://example.test/uploads",
            "state_file": tmp_path / "state" / "state.json",
            "lock_timeout": 0.1,
        }
        for key, value in overrides.items():
            if key in ScanSettings.model_fields:
                scan_fields[key] = value
            else:
                relocation_fields[key] = value

        return Settings(
            scan=ScanSettings(**scan_fields),
            relocation=RelocationSettings(**relocation_fields),
            logging=LoggingSettings(console_output=False),
        )

    return factory


@pytest.fixture
def settings(make_settings: Callable[..., Settings]) -> Settings:
    """Settings with the default fake plugin tree."""
    return make_settings()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible names."""
    return random.Random(1234)
