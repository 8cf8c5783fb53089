"""Binary acquisition: platform mapping, prebuilt downloads, source builds."""
from remix_bootstrap.binaries.platforms import (
    resolve_target,
    detect_target,
    os_family,
)
from remix_bootstrap.binaries.fetcher import (
    archive_descriptor,
    download_release,
    fetch_binary,
)
from remix_bootstrap.binaries.builder import build_from_source
from remix_bootstrap.binaries.project import is_project_checkout

__all__ = [
    "resolve_target",
    "detect_target",
    "os_family",
    "archive_descriptor",
    "download_release",
    "fetch_binary",
    "build_from_source",
    "is_project_checkout",
]
