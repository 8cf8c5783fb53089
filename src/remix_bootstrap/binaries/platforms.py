"""Platform detection and mapping."""
from typing import Optional

from remix_bootstrap.errors import UnsupportedPlatformError
from remix_bootstrap.types import Arch, BootstrapConfig, OSFamily, TargetTriple

# Exact `uname -s` / platform.system() values
OS_MAPPINGS = {
    "Darwin": OSFamily.DARWIN,
    "Linux": OSFamily.LINUX,
    "Windows": OSFamily.WINDOWS,
}

# MSYS-like shells report a versioned kernel name, e.g. MINGW64_NT-10.0-19045
WINDOWS_SHELL_PREFIXES = ("MINGW", "MSYS", "CYGWIN")

ARCH_MAPPINGS = {
    "arm64": Arch.AARCH64,
    "aarch64": Arch.AARCH64,
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,
}


def os_family(os_name: str) -> Optional[OSFamily]:
    """Map a raw OS name onto its family, or None if unrecognized."""
    if os_name in OS_MAPPINGS:
        return OS_MAPPINGS[os_name]
    if os_name.startswith(WINDOWS_SHELL_PREFIXES):
        return OSFamily.WINDOWS
    return None


def resolve_target(os_name: str, machine: str) -> TargetTriple:
    """Derive the release target for raw host OS and architecture strings."""
    family = os_family(os_name)
    if family is None:
        raise UnsupportedPlatformError("operating system", os_name)

    arch = ARCH_MAPPINGS.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatformError("architecture", machine)

    # One macOS build: the arm64 binary runs on Intel under Rosetta 2
    if family == OSFamily.DARWIN:
        arch = Arch.AARCH64

    return TargetTriple(arch=arch, os=family)


def detect_target(config: BootstrapConfig) -> TargetTriple:
    """Resolve the target for the host described by config."""
    return resolve_target(config.os_name, config.machine)
