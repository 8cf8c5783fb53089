"""Recognize a remix-browser cargo checkout."""
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from remix_bootstrap.binaries.constants import BINARY_NAME, CARGO_MANIFEST
from remix_bootstrap.logging import get_logger

logger = get_logger(__name__)


def read_manifest(project_dir: Path) -> Optional[Dict[str, Any]]:
    """Parse the Cargo manifest in project_dir, or None if absent or unreadable."""
    manifest = project_dir / CARGO_MANIFEST
    if not manifest.is_file():
        return None

    try:
        with open(manifest, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.debug({"event": "manifest_unreadable", "path": str(manifest), "error": str(e)})
        return None


def is_project_checkout(project_dir: Path) -> bool:
    """True when project_dir is the cargo project that builds the binary.

    Either the package itself or one of its ``[[bin]]`` targets must carry
    the binary's name.
    """
    data = read_manifest(project_dir)
    if data is None:
        return False

    package = data.get("package", {})
    if isinstance(package, dict) and package.get("name") == BINARY_NAME:
        return True

    bins = data.get("bin", [])
    return isinstance(bins, list) and any(
        isinstance(b, dict) and b.get("name") == BINARY_NAME for b in bins
    )
