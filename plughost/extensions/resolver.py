"""Module resolution: map a candidate path to the single entry file to import."""

import logging
from pathlib import Path

from plughost.extensions.manifest import MANIFEST_FILENAME, load_manifest

logger = logging.getLogger(__name__)

MODULE_SUFFIXES = (".py", ".pyc")
# Probed in order when the manifest does not name an existing entry file.
ENTRY_FILENAMES = ("__init__.py", "main.py", "plugin.py")


def is_module_file(path: Path) -> bool:
    return path.suffix in MODULE_SUFFIXES


def _manifest_entry(directory: Path) -> Path | None:
    manifest_path = directory / MANIFEST_FILENAME
    if not manifest_path.is_file():
        return None
    try:
        manifest = load_manifest(manifest_path)
    except Exception as e:
        logger.warning("Invalid manifest %s: %s", manifest_path, e)
        return None
    if not manifest.main:
        return None
    entry = directory / manifest.main
    if not entry.is_file():
        logger.warning(
            "Manifest %s declares main '%s' which does not exist",
            manifest_path,
            manifest.main,
        )
        return None
    return entry


def resolve_directory(directory: Path) -> Path | None:
    """Manifest ``main`` first, then ENTRY_FILENAMES; first existing file wins."""
    if not any(directory.iterdir()):
        return None
    entry = _manifest_entry(directory)
    if entry is not None:
        return entry
    for filename in ENTRY_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def resolve(path: Path) -> Path | None:
    """Entry file for a directory or module file; None when nothing loadable is there."""
    if path.is_dir():
        return resolve_directory(path)
    if path.is_file() and is_module_file(path):
        return path
    return None
