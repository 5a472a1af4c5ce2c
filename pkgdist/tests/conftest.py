"""Shared test fixtures and utilities."""

import os
import pytest
from pathlib import Path
from typing import Any, Dict, Generator


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove PKGDIST_* variables so tests only see the bundled config."""
    for key in list(os.environ):
        if key.startswith("PKGDIST_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def package_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None
) -> Path:
    """Use a temporary directory as the package root."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_manifest() -> Dict[str, Any]:
    """A manifest as it looks in a library's source tree."""
    return {
        "name": "@acme/widgets",
        "version": "1.2.3",
        "description": "Widgets for everyone",
        "private": True,
        "type": "module",
        "main": "dist/index.js",
        "types": "dist/index.d.ts",
        "exports": {
            ".": {"development": "src/index.ts", "default": "dist/index.js"},
            "./utils": {
                "import": "dist/utils.mjs",
                "require": "dist/utils.cjs",
            },
            "./package.json": "./package.json",
        },
        "files": ["dist"],
        "scripts": {"build": "tsc", "test": "vitest"},
        "dependencies": {"lodash": "^4.17.21"},
        "devDependencies": {"typescript": "^5.0.0"},
    }
