"""Test helpers for working with manifest files."""

import json
from pathlib import Path
from typing import Any, Dict


def write_manifest(directory: Path, data: Dict[str, Any]) -> Path:
    """Write a manifest to package.json in the given directory."""
    path = directory / "package.json"
    path.write_text(json.dumps(data, indent=2))
    return path
