"""PATH integration through a managed symlink.

PATH integration is advisory: ``ensure_symlink`` never raises, and every
failure inside it degrades to a no-op. The bootstrap runs the binary by
its full path regardless of what happens here.
"""

import os
from pathlib import Path
from typing import Optional

from remix_bootstrap.binaries.constants import USER_BIN_DIR
from remix_bootstrap.binaries.platforms import os_family
from remix_bootstrap.errors import IntegrationError
from remix_bootstrap.logging import get_logger
from remix_bootstrap.types import BootstrapConfig, LinkState, OSFamily

logger = get_logger(__name__)


def is_on_path(directory: Path, path_env: str) -> bool:
    entries = [entry for entry in path_env.split(os.pathsep) if entry]
    return str(directory) in entries


def select_link_dir(config: BootstrapConfig) -> Optional[Path]:
    """Pick the directory the link goes in, creating ~/.local/bin if needed."""
    if config.home is None:
        return None

    user_bin = config.home.joinpath(*USER_BIN_DIR)
    try:
        user_bin.mkdir(parents=True, exist_ok=True)
        return user_bin
    except OSError as e:
        logger.debug({"event": "user_bin_unavailable", "dir": str(user_bin), "error": str(e)})

    system_bin = config.system_bin_dir
    if system_bin.is_dir() and os.access(system_bin, os.W_OK):
        return system_bin

    return None


def inspect_link(link_path: Path) -> LinkState:
    """Classify what currently sits at link_path."""
    if link_path.is_symlink():
        return LinkState.SYMLINK
    if os.path.lexists(link_path):
        return LinkState.REGULAR_FILE
    return LinkState.MISSING


def _link(target: str, link_path: Path, replace: bool) -> None:
    try:
        if replace:
            link_path.unlink()
        link_path.symlink_to(target)
    except OSError as e:
        raise IntegrationError(f"Could not link {link_path}: {e}") from e


def ensure_symlink(target_binary: Path, config: BootstrapConfig) -> None:
    """Expose target_binary as ``<link dir>/<binary name>``. Never raises."""
    try:
        _ensure_symlink(target_binary, config)
    except Exception as e:
        logger.debug({"event": "symlink_skipped", "error": str(e)})


def _ensure_symlink(target_binary: Path, config: BootstrapConfig) -> None:
    if os_family(config.os_name) == OSFamily.WINDOWS:
        return

    link_dir = select_link_dir(config)
    if link_dir is None:
        return

    target = os.path.abspath(target_binary)
    link_path = link_dir / config.binary_name
    state = inspect_link(link_path)

    if state == LinkState.REGULAR_FILE:
        logger.info({
            "event": "standalone_install_found",
            "path": str(link_path),
            "note": f"Standalone install found at {link_path}; skipping symlink."
        })
        return

    if state == LinkState.SYMLINK:
        if os.readlink(link_path) == target:
            return
        logger.info({"event": "updating_symlink", "link": str(link_path), "target": target})
        _link(target, link_path, replace=True)
    else:
        logger.info({"event": "creating_symlink", "link": str(link_path), "target": target})
        _link(target, link_path, replace=False)

    if not is_on_path(link_dir, config.path_env):
        logger.warning({
            "event": "link_dir_not_on_path",
            "link_dir": str(link_dir),
            "note": f"{link_dir} is not in your PATH.",
            "hint": f'Add it with: export PATH="{link_dir}:$PATH"'
        })
