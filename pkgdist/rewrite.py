"""Rewrite a package manifest for publishing from its build output directory.

The published manifest sits inside the build output directory, so every path
that points into that directory loses its prefix. Development-only fields are
dropped and single-entrypoint export maps are simplified.
"""

import copy
import logging
from typing import Any, Dict, List, TypedDict, Union

logger = logging.getLogger(__name__)

# Fields that only matter while building the package
DEV_ONLY_FIELDS = ("files", "scripts", "devDependencies")

DEVELOPMENT_CONDITION = "development"
DEFAULT_CONDITION = "default"

ExportConditions = Dict[str, Any]
ExportEntry = Union[str, ExportConditions]


# Known fields of a package manifest. Every other key passes through as-is.
ManifestFields = TypedDict(
    "ManifestFields",
    {
        "main": str,
        "types": str,
        "exports": Dict[str, ExportEntry],
        "private": bool,
        "files": List[str],
        "scripts": Dict[str, str],
        "devDependencies": Dict[str, str],
    },
    total=False,
)


def normalize_output_dir(output_dir: str) -> str:
    """Append a trailing slash to the output directory if it is missing."""
    return output_dir if output_dir.endswith("/") else output_dir + "/"


def strip_output_prefix(value: Any, prefix: str) -> Any:
    """Remove the first occurrence of the output directory prefix from a path.

    Non-string values are returned unchanged.
    """
    if not isinstance(value, str) or prefix not in value:
        return value
    return value.replace(prefix, "", 1)


def rewrite_export_entry(entry: Any, prefix: str) -> Any:
    """Rewrite a single value of the ``exports`` map.

    Drops the ``development`` condition, collapses a map left with only a
    ``default`` condition to its path, and strips the output prefix from
    every remaining path.

    Args:
        entry: A path string, a mapping of condition name to path, or a list
            of fallback paths
        prefix: Output directory prefix, with trailing slash

    Returns:
        The rewritten entry
    """
    if isinstance(entry, dict):
        entry = dict(entry)
        if DEVELOPMENT_CONDITION in entry:
            del entry[DEVELOPMENT_CONDITION]
        if len(entry) == 1 and DEFAULT_CONDITION in entry:
            entry = entry[DEFAULT_CONDITION]

    if isinstance(entry, str):
        return strip_output_prefix(entry, prefix)

    if isinstance(entry, dict):
        return {
            condition: strip_output_prefix(path, prefix)
            for condition, path in entry.items()
        }

    if isinstance(entry, list):
        return [strip_output_prefix(path, prefix) for path in entry]

    return entry


def rewrite_manifest(manifest: Dict[str, Any], output_dir: str) -> Dict[str, Any]:
    """Build the manifest to publish from the build output directory.

    Args:
        manifest: Parsed source manifest; it is not modified
        output_dir: Build output directory, with or without trailing slash

    Returns:
        A new manifest with the same key order as the source
    """
    prefix = normalize_output_dir(output_dir)
    result: Dict[str, Any] = copy.deepcopy(manifest)
    fields: ManifestFields = result  # type: ignore[assignment]

    fields["private"] = False

    for key in ("main", "types"):
        if result.get(key):
            stripped = strip_output_prefix(result[key], prefix)
            logger.debug(f"Rewrote {key}: {result[key]!r} -> {stripped!r}")
            result[key] = stripped

    exports = fields.get("exports")
    if isinstance(exports, dict):
        for subpath in exports:
            exports[subpath] = rewrite_export_entry(exports[subpath], prefix)
            logger.debug(f"Rewrote export {subpath!r}: {exports[subpath]!r}")
    elif exports is not None:
        logger.debug(f"Leaving non-mapping exports unchanged: {exports!r}")

    for key in DEV_ONLY_FIELDS:
        if key in result:
            del result[key]
            logger.debug(f"Removed {key}")

    return result
