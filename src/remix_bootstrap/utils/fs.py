import asyncio
import os
import shutil
import stat
import sys
from pathlib import Path
from typing import Optional, TextIO, Tuple

from remix_bootstrap.logging import get_logger

logger = get_logger(__name__)

EXECUTABLE_MODE = 0o755

# Longest single output line read from a subprocess
STREAM_LINE_LIMIT = 1024 * 1024


async def async_subprocess_stream(
    *args, cwd: Optional[Path] = None, stream: Optional[TextIO] = None
) -> Tuple[int, str]:
    """
    Run a command asynchronously, echoing its output as it arrives.

    The command's stdout is folded into its stderr, so nothing it prints
    reaches our own stdout.

    :param args: Command and arguments to run
    :param cwd: Working directory for the command
    :param stream: Where output lines are echoed, sys.stderr when omitted
    :return: Tuple of (returncode, combined output)
    """
    if stream is None:
        stream = sys.stderr

    proc = await asyncio.create_subprocess_exec(
        *args,
        cwd=cwd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
        limit=STREAM_LINE_LIMIT,
    )

    lines = []
    async for raw in proc.stdout:
        line = raw.decode(errors="replace")
        stream.write(line)
        stream.flush()
        lines.append(line)

    returncode = await proc.wait()
    return returncode, "".join(lines)


def is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def make_executable(path: Path) -> None:
    """Add execute bits for everyone who can read the file."""
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def install_binary(source: Path, dest: Path) -> Path:
    """Copy a binary into place atomically and mark it executable.

    The copy lands under a temporary name next to ``dest`` and is renamed
    over it, so ``dest`` is either the old file or the complete new one.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    staging = dest.with_name(f".{dest.name}.partial")

    try:
        shutil.copyfile(source, staging)
        staging.chmod(EXECUTABLE_MODE)
        os.replace(staging, dest)
    finally:
        if staging.exists():
            staging.unlink()

    logger.debug({
        "event": "binary_installed",
        "source": str(source),
        "destination": str(dest)
    })

    return dest
