import pytest

from remix_bootstrap.binaries.platforms import (
    detect_target,
    os_family,
    resolve_target,
)
from remix_bootstrap.errors import UnsupportedPlatformError
from remix_bootstrap.types import Arch, OSFamily, TargetTriple


@pytest.mark.parametrize(
    "os_name,machine,expected",
    [
        ("Linux", "x86_64", "x86_64-linux"),
        ("Linux", "aarch64", "aarch64-linux"),
        ("Linux", "arm64", "aarch64-linux"),
        ("Windows", "AMD64", "x86_64-windows"),
        ("MINGW64_NT-10.0-19045", "x86_64", "x86_64-windows"),
        ("MSYS_NT-10.0", "x86_64", "x86_64-windows"),
        ("CYGWIN_NT-10.0", "x86_64", "x86_64-windows"),
        ("Darwin", "arm64", "aarch64-darwin"),
    ],
)
def test_resolve_target(os_name, machine, expected):
    """Test recognized OS/arch pairs map onto their target"""
    assert str(resolve_target(os_name, machine)) == expected


@pytest.mark.parametrize("machine", ["x86_64", "arm64", "aarch64"])
def test_darwin_always_aarch64(machine):
    """Test macOS is forced onto the arm64 build whatever the host reports"""
    target = resolve_target("Darwin", machine)
    assert target == TargetTriple(arch=Arch.AARCH64, os=OSFamily.DARWIN)


@pytest.mark.parametrize("os_name", ["FreeBSD", "linux", "darwin", "SunOS", "", "Linux "])
def test_unsupported_os(os_name):
    """Test OS names outside the closed set are rejected"""
    with pytest.raises(UnsupportedPlatformError) as exc_info:
        resolve_target(os_name, "x86_64")

    assert exc_info.value.details == {"kind": "operating system", "value": os_name}


@pytest.mark.parametrize("machine", ["i686", "armv7l", "riscv64", "ppc64le", ""])
def test_unsupported_arch(machine):
    """Test unknown architectures are rejected, even on macOS"""
    with pytest.raises(UnsupportedPlatformError, match="architecture"):
        resolve_target("Linux", machine)
    with pytest.raises(UnsupportedPlatformError, match="architecture"):
        resolve_target("Darwin", machine)


def test_target_triple_release_naming():
    """Test rust triple and archive format per OS"""
    linux = TargetTriple(arch=Arch.X86_64, os=OSFamily.LINUX)
    windows = TargetTriple(arch=Arch.X86_64, os=OSFamily.WINDOWS)
    darwin = TargetTriple(arch=Arch.AARCH64, os=OSFamily.DARWIN)

    assert linux.rust_triple == "x86_64-unknown-linux-gnu"
    assert windows.rust_triple == "x86_64-pc-windows-msvc"
    assert darwin.rust_triple == "aarch64-apple-darwin"
    assert linux.archive_format == "tar.gz"
    assert darwin.archive_format == "tar.gz"
    assert windows.archive_format == "zip"


def test_os_family():
    assert os_family("Darwin") == OSFamily.DARWIN
    assert os_family("MINGW32_NT-6.1") == OSFamily.WINDOWS
    assert os_family("Plan9") is None


def test_detect_target_uses_config(make_config):
    assert str(detect_target(make_config(os_name="Darwin", machine="x86_64"))) == "aarch64-darwin"
    with pytest.raises(UnsupportedPlatformError):
        detect_target(make_config(os_name="Haiku"))
