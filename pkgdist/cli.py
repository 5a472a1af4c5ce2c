import logging
import sys
from pathlib import Path
from typing import List

import fire

from .config import PublishSettings, get_settings
from .rewrite import rewrite_manifest
from .storage import ManifestError, ManifestStorage

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging with the specified level."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def publish_manifest(settings: PublishSettings) -> Path:
    """Read the source manifest, rewrite it and write it to the output directory.

    Args:
        settings: Settings for this run

    Returns:
        Path of the written manifest
    """
    storage = ManifestStorage(
        manifest_name=settings.manifest_name, indent=settings.indent
    )
    manifest = storage.load_manifest(Path(settings.source).resolve())
    published = rewrite_manifest(manifest, settings.output_dir)
    path = storage.store_manifest(published, Path(settings.output_dir).resolve())
    logger.info(f"Prepared {settings.source} for publishing from {settings.output_dir}")
    return path


def prepare(
    output_dir: str | None = None,
    source: str | None = None,
    log_level: str | None = None,
) -> None:
    """
    Write a publishable copy of package.json into the build output directory.

    Args:
        output_dir: Build output directory. If None, uses the path from config.
        source: Manifest to read. If None, uses the path from config.
        log_level: Logging level. If None, uses the level from config.
    """
    settings = get_settings(output_dir=output_dir, source=source, log_level=log_level)
    logging.getLogger().setLevel(settings.log_level)
    path = publish_manifest(settings)
    logger.info(f"Wrote {path}")


def _quote_values(argv: List[str]) -> List[str]:
    """Quote argument values so Fire passes them through as strings.

    Every parameter of `prepare` is a path or name, so `1e3` stays the string `"1e3"`.
    """
    quoted = []
    for arg in argv:
        if arg.startswith("-"):
            flag, sep, value = arg.partition("=")
            quoted.append(flag + sep + (repr(value) if sep else ""))
        else:
            quoted.append(repr(arg))
    return quoted


def main(argv: List[str] | None = None) -> None:
    setup_logging("INFO")
    if argv is None:
        argv = sys.argv[1:]
    try:
        fire.Fire(prepare, command=_quote_values(argv))
    except ManifestError as e:
        logger.error(f"Failed to prepare manifest: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
