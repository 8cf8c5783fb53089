"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class Arch(Enum):
    X86_64 = "x86_64"
    AARCH64 = "aarch64"


class OSFamily(Enum):
    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"


LinkState = Enum('LinkState', ['MISSING', 'SYMLINK', 'REGULAR_FILE'])

# Vendor/ABI segment of the release asset triple for each OS
RUST_OS_TAGS = {
    OSFamily.DARWIN: "apple-darwin",
    OSFamily.LINUX: "unknown-linux-gnu",
    OSFamily.WINDOWS: "pc-windows-msvc",
}


@dataclass(frozen=True)
class TargetTriple:
    """Canonical (architecture, OS) pair for a prebuilt artifact"""
    arch: Arch
    os: OSFamily

    def __str__(self) -> str:
        return f"{self.arch.value}-{self.os.value}"

    @property
    def rust_triple(self) -> str:
        return f"{self.arch.value}-{RUST_OS_TAGS[self.os]}"

    @property
    def archive_format(self) -> str:
        return "zip" if self.os == OSFamily.WINDOWS else "tar.gz"


@dataclass(frozen=True)
class ArchiveDescriptor:
    """Release archive name and where to get it"""
    filename: str
    download_url: str


@dataclass(frozen=True)
class BootstrapConfig:
    """Everything the bootstrap needs from the host, resolved once at startup"""
    owner: str
    repo: str
    binary_name: str
    project_dir: Path
    install_dir: Path
    home: Optional[Path]
    system_bin_dir: Path
    path_env: str
    os_name: str
    machine: str
    api_base: str
    download_base: str
    build_command: str = "cargo"
    log_level: str = "INFO"

    @property
    def install_path(self) -> Path:
        return self.install_dir / self.binary_name

    @property
    def releases_url(self) -> str:
        return f"{self.download_base}/{self.owner}/{self.repo}/releases"
