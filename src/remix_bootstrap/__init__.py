"""Bootstrap and PATH integration for the remix-browser binary."""

from remix_bootstrap.types import (
    Arch,
    OSFamily,
    TargetTriple,
    ArchiveDescriptor,
    BootstrapConfig,
    LinkState,
)
from remix_bootstrap.config import load_config
from remix_bootstrap.binaries import (
    resolve_target,
    fetch_binary,
    build_from_source,
)
from remix_bootstrap.symlinks import ensure_symlink
from remix_bootstrap.bootstrap import run_bootstrap
from remix_bootstrap.install import run_install
from remix_bootstrap.errors import (
    BootstrapError,
    UnsupportedPlatformError,
    AcquisitionError,
    BuildError,
    IntegrationError,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "Arch",
    "OSFamily",
    "TargetTriple",
    "ArchiveDescriptor",
    "BootstrapConfig",
    "LinkState",

    # Configuration
    "load_config",

    # Acquisition
    "resolve_target",
    "fetch_binary",
    "build_from_source",

    # Integration and orchestration
    "ensure_symlink",
    "run_bootstrap",
    "run_install",

    # Error types
    "BootstrapError",
    "UnsupportedPlatformError",
    "AcquisitionError",
    "BuildError",
    "IntegrationError",
]
