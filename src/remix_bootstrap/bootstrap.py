"""Bootstrap orchestration: cached binary, then download, then build."""
import os
import subprocess
import sys
from pathlib import Path
from typing import Awaitable, Callable, List, Sequence

from remix_bootstrap.binaries.builder import build_from_source
from remix_bootstrap.binaries.fetcher import fetch_binary
from remix_bootstrap.binaries.platforms import detect_target, os_family
from remix_bootstrap.errors import EXIT_FAILURE, UnsupportedPlatformError, log_error
from remix_bootstrap.logging import flush_logging, get_logger
from remix_bootstrap.symlinks import ensure_symlink
from remix_bootstrap.types import BootstrapConfig, OSFamily, TargetTriple
from remix_bootstrap.utils.fs import is_executable, make_executable

logger = get_logger(__name__)

Strategy = Callable[[TargetTriple, BootstrapConfig], Awaitable[bool]]
Handoff = Callable[[Path, Sequence[str]], int]

# Tried in order; the first to return True wins
STRATEGIES: List[Strategy] = [fetch_binary, build_from_source]


def exec_binary(binary: Path, argv: Sequence[str]) -> int:
    """Replace the current process with binary, forwarding argv."""
    flush_logging()
    sys.stdout.flush()
    sys.stderr.flush()

    path = str(binary)
    if os.name == "nt":
        # No exec on Windows: run as a child and mirror its exit status
        completed = subprocess.run([path, *argv], check=False)
        raise SystemExit(completed.returncode)

    os.execv(path, [path, *argv])
    return 0  # unreachable


def print_guidance(message: str) -> None:
    print(message, file=sys.stderr)


def unsupported_platform_message(error: UnsupportedPlatformError, config: BootstrapConfig) -> str:
    return (
        f"Error: {error}\n"
        f"remix-browser publishes binaries for macOS (arm64), Linux and Windows on x86_64/aarch64.\n"
        f"See {config.releases_url} for available downloads."
    )


def manual_install_message(config: BootstrapConfig) -> str:
    return (
        "Error: could not install remix-browser.\n"
        "\n"
        "Neither a prebuilt download nor a local build succeeded. To install manually:\n"
        f"  1. Download the archive for your platform from {config.releases_url}\n"
        f"     and place the binary at {config.install_path}\n"
        "  2. Or install Rust (https://rustup.rs) and run\n"
        f"       cd {config.project_dir} && cargo build --release\n"
    )


async def run_bootstrap(
    config: BootstrapConfig,
    argv: Sequence[str],
    strategies: Sequence[Strategy] = STRATEGIES,
    handoff: Handoff = exec_binary,
) -> int:
    """Make sure the binary exists, link it onto PATH and hand off to it.

    Args:
        config: Run configuration
        argv: Arguments forwarded unchanged to the binary
        strategies: Acquisition strategies, in priority order
        handoff: Called with the binary and argv once it is in place

    Returns:
        Exit code; only returned when handoff returns or acquisition fails
    """
    binary = config.install_path

    if binary.is_file():
        if os_family(config.os_name) != OSFamily.WINDOWS and not is_executable(binary):
            make_executable(binary)
        logger.debug({"event": "using_cached_binary", "path": str(binary)})
        ensure_symlink(binary, config)
        return handoff(binary, argv)

    try:
        target = detect_target(config)
    except UnsupportedPlatformError as e:
        log_error(e, logger=logger)
        print_guidance(unsupported_platform_message(e, config))
        return e.exit_code

    logger.info({"event": "installing_binary", "target": str(target), "path": str(binary)})

    for strategy in strategies:
        if await strategy(target, config):
            ensure_symlink(binary, config)
            return handoff(binary, argv)

    logger.error({"event": "install_failed", "target": str(target)})
    print_guidance(manual_install_message(config))
    return EXIT_FAILURE
