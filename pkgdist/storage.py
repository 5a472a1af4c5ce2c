import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    """Reject NaN and Infinity, which JSON does not allow."""
    raise ValueError(f"Invalid JSON constant: {name}")


class ManifestError(Exception):
    """Base error for manifest file I/O."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class ManifestReadError(ManifestError):
    """Source manifest is missing, unreadable or not a JSON object."""


class ManifestWriteError(ManifestError):
    """Output directory or manifest file could not be written."""


class ManifestStorage:
    def __init__(self, manifest_name: str = "package.json", indent: int = 2):
        self.manifest_name = manifest_name
        self.indent = indent

    def load_manifest(self, path: str | Path) -> Dict[str, Any]:
        """Load a package manifest.

        Args:
            path: Path to the manifest file

        Returns:
            Parsed manifest, with the key order of the file
        """
        manifest_path = Path(path)
        logger.info(f"Reading manifest from {manifest_path}")
        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = json.load(f, parse_constant=_reject_constant)
        except (OSError, ValueError) as e:
            logger.exception(f"Failed to read manifest {manifest_path}")
            raise ManifestReadError(
                f"Could not read manifest {manifest_path}: {e}", manifest_path
            ) from e

        if not isinstance(data, dict):
            raise ManifestReadError(
                f"Manifest {manifest_path} must contain a JSON object, "
                f"got {type(data).__name__}",
                manifest_path,
            )
        return data

    def store_manifest(self, data: Dict[str, Any], output_dir: str | Path) -> Path:
        """Store a manifest in the output directory, creating it if needed.

        Args:
            data: Manifest data to store
            output_dir: Directory that receives the manifest

        Returns:
            Path where the manifest was stored
        """
        manifest_path = Path(output_dir) / self.manifest_name
        try:
            manifest_path.parent.mkdir(parents=True, exist_ok=True)

            logger.info(f"Storing manifest at {manifest_path}")
            manifest_json = json.dumps(
                data, indent=self.indent, ensure_ascii=False, allow_nan=False
            )
            manifest_path.write_text(manifest_json, encoding="utf-8")
            logger.debug(f"Successfully stored manifest at {manifest_path}")

            return manifest_path
        except (OSError, ValueError) as e:
            logger.exception(f"Failed to store manifest at {manifest_path}")
            raise ManifestWriteError(
                f"Could not write manifest {manifest_path}: {e}", manifest_path
            ) from e
