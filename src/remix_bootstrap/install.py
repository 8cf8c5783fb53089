"""Standalone installer.

Installs the latest prebuilt binary into a bin directory on PATH, for
use outside a project checkout. Never builds from source.
"""

import asyncio
import dataclasses
import json
import os
from pathlib import Path
from typing import Optional

import aiohttp

from remix_bootstrap.binaries.constants import BINARY_NAME, USER_BIN_DIR
from remix_bootstrap.binaries.fetcher import download_release
from remix_bootstrap.binaries.platforms import detect_target
from remix_bootstrap.bootstrap import print_guidance, unsupported_platform_message
from remix_bootstrap.errors import (
    EXIT_FAILURE,
    AcquisitionError,
    UnsupportedPlatformError,
    log_error,
)
from remix_bootstrap.logging import get_logger
from remix_bootstrap.symlinks import is_on_path
from remix_bootstrap.types import BootstrapConfig

logger = get_logger(__name__)


def standalone_install_dir(config: BootstrapConfig) -> Optional[Path]:
    """System bin dir if writable, else ~/.local/bin."""
    system_bin = config.system_bin_dir
    if system_bin.is_dir() and os.access(system_bin, os.W_OK):
        return system_bin

    if config.home is None:
        return None

    user_bin = config.home.joinpath(*USER_BIN_DIR)
    try:
        user_bin.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return user_bin


def mcp_config_snippet(binary: Path) -> str:
    return json.dumps(
        {"mcpServers": {BINARY_NAME: {"command": str(binary)}}},
        indent=2
    )


def install_summary(binary: Path, install_dir: Path, path_env: str) -> str:
    lines = [
        "",
        "remix-browser installed successfully!",
        "",
        f"Binary location: {binary}",
        "",
        "Add to your MCP client config (e.g. ~/.claude/mcp.json):",
        "",
        mcp_config_snippet(binary),
    ]
    if not is_on_path(install_dir, path_env):
        lines += [
            "",
            f"NOTE: {install_dir} is not in your PATH.",
            f'Add it with: export PATH="{install_dir}:$PATH"',
        ]
    return "\n".join(lines)


async def run_install(config: BootstrapConfig) -> int:
    """Install the latest release as a standalone binary."""
    try:
        target = detect_target(config)
    except UnsupportedPlatformError as e:
        log_error(e, logger=logger)
        print_guidance(unsupported_platform_message(e, config))
        return e.exit_code

    install_dir = standalone_install_dir(config)
    if install_dir is None:
        print_guidance("Error: no writable install directory (tried "
                       f"{config.system_bin_dir} and ~/.local/bin).")
        return EXIT_FAILURE

    standalone = dataclasses.replace(config, install_dir=install_dir)
    logger.info({"event": "standalone_install", "target": str(target), "dir": str(install_dir)})

    try:
        binary = await download_release(target, standalone)
    except (AcquisitionError, aiohttp.ClientError, asyncio.TimeoutError,
            OSError, ValueError) as e:
        log_error(e, logger=logger)
        print_guidance(
            f"Error: installation failed: {e}\n\n"
            f"Please check {config.releases_url} for available downloads."
        )
        return EXIT_FAILURE

    print_guidance(install_summary(binary, install_dir, config.path_env))
    return 0
