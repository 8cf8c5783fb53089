"""Configuration resolved once from the process environment.

Resolution order for the install directory:
1. REMIX_BROWSER_INSTALL_DIR (if set)
2. <project dir>/bin when the project dir is the remix-browser cargo checkout
3. <user data dir>/bin (platform-specific, via appdirs)
"""

import os
import platform
from pathlib import Path
from typing import Mapping, Optional

import appdirs

from remix_bootstrap.binaries.constants import (
    APP_NAME,
    BINARY_NAME,
    DEFAULT_REPOSITORY,
    GITHUB_API_BASE,
    GITHUB_DOWNLOAD_BASE,
    SYSTEM_BIN_DIR,
)
from remix_bootstrap.binaries.platforms import os_family
from remix_bootstrap.binaries.project import is_project_checkout
from remix_bootstrap.errors import BootstrapError
from remix_bootstrap.types import BootstrapConfig, OSFamily

REPO_ENV = "REMIX_BROWSER_REPO"
PROJECT_DIR_ENV = "REMIX_BROWSER_PROJECT_DIR"
INSTALL_DIR_ENV = "REMIX_BROWSER_INSTALL_DIR"
LOG_LEVEL_ENV = "REMIX_BROWSER_LOG_LEVEL"
API_BASE_ENV = "REMIX_BROWSER_API_BASE"
DOWNLOAD_BASE_ENV = "REMIX_BROWSER_DOWNLOAD_BASE"
CARGO_ENV = "CARGO"


def parse_repository(value: str) -> tuple[str, str]:
    """Split an ``owner/repo`` coordinate."""
    owner, sep, repo = value.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise BootstrapError(
            f"Invalid repository coordinate: {value!r} (expected owner/repo)",
            details={"value": value}
        )
    return owner, repo


def resolve_home(environ: Mapping[str, str], family: Optional[OSFamily]) -> Optional[Path]:
    home = environ.get("HOME")
    if not home and family == OSFamily.WINDOWS:
        home = environ.get("USERPROFILE")
    return Path(home) if home else None


def default_install_dir(project_dir: Path) -> Path:
    if is_project_checkout(project_dir):
        return project_dir / "bin"
    return Path(appdirs.user_data_dir(APP_NAME)) / "bin"


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    os_name: Optional[str] = None,
    machine: Optional[str] = None,
) -> BootstrapConfig:
    """Build the run configuration from environment and host signals."""
    if environ is None:
        environ = os.environ
    os_name = os_name if os_name is not None else platform.system()
    machine = machine if machine is not None else platform.machine()
    family = os_family(os_name)

    owner, repo = parse_repository(environ.get(REPO_ENV) or DEFAULT_REPOSITORY)

    project_dir = Path(environ.get(PROJECT_DIR_ENV) or os.getcwd()).absolute()
    install_dir_override = environ.get(INSTALL_DIR_ENV)
    install_dir = (
        Path(install_dir_override).absolute()
        if install_dir_override
        else default_install_dir(project_dir)
    )

    binary_name = f"{BINARY_NAME}.exe" if family == OSFamily.WINDOWS else BINARY_NAME

    return BootstrapConfig(
        owner=owner,
        repo=repo,
        binary_name=binary_name,
        project_dir=project_dir,
        install_dir=install_dir,
        home=resolve_home(environ, family),
        system_bin_dir=Path(SYSTEM_BIN_DIR),
        path_env=environ.get("PATH", ""),
        os_name=os_name,
        machine=machine,
        api_base=(environ.get(API_BASE_ENV) or GITHUB_API_BASE).rstrip("/"),
        download_base=(environ.get(DOWNLOAD_BASE_ENV) or GITHUB_DOWNLOAD_BASE).rstrip("/"),
        build_command=environ.get(CARGO_ENV) or "cargo",
        log_level=(environ.get(LOG_LEVEL_ENV) or "INFO").upper(),
    )
