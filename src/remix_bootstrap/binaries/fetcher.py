"""Prebuilt release download and installation."""
import asyncio
import tarfile
import tempfile
import zipfile
import zlib
from pathlib import Path
from typing import List, Union

import aiohttp

from remix_bootstrap.binaries.constants import (
    BINARY_NAME,
    DOWNLOAD_PATH,
    RELEASES_PATH,
)
from remix_bootstrap.binaries.releases import fetch_latest_release_version
from remix_bootstrap.errors import AcquisitionError
from remix_bootstrap.logging import get_logger
from remix_bootstrap.types import ArchiveDescriptor, BootstrapConfig, TargetTriple
from remix_bootstrap.utils.fs import install_binary

logger = get_logger(__name__)

CHUNK_SIZE = 8192


def archive_descriptor(
    target: TargetTriple, version: str, config: BootstrapConfig
) -> ArchiveDescriptor:
    """Name and URL of the release archive for a target."""
    filename = f"{BINARY_NAME}-{target.rust_triple}.{target.archive_format}"
    download_url = (
        f"{config.download_base}/{config.owner}/{config.repo}"
        f"/{RELEASES_PATH}/{DOWNLOAD_PATH}/{version}/{filename}"
    )
    return ArchiveDescriptor(filename=filename, download_url=download_url)


async def download_file(session: aiohttp.ClientSession, url: str, dest: Path) -> None:
    """Stream a URL to disk."""
    try:
        async with session.get(url) as response:
            if response.status != 200:
                raise AcquisitionError(
                    f"Download failed with status {response.status}",
                    details={"url": url, "status": response.status}
                )

            with open(dest, "wb") as f:
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    f.write(chunk)

    except aiohttp.ClientError as e:
        if dest.exists():
            dest.unlink()
        raise AcquisitionError(f"Failed to download {url}: {e}") from e
    except AcquisitionError:
        if dest.exists():
            dest.unlink()
        raise

    logger.info({"event": "archive_downloaded", "url": url, "size": dest.stat().st_size})


def get_archive_files(archive: Union[zipfile.ZipFile, tarfile.TarFile]) -> List[str]:
    """List the regular file members of a zip or tar archive."""
    if isinstance(archive, zipfile.ZipFile):
        return [info.filename for info in archive.infolist() if not info.is_dir()]
    return [member.name for member in archive.getmembers() if member.isfile()]


def extract_binary(archive_path: Path, binary_name: str, dest_dir: Path) -> Path:
    """Extract the named binary from a zip or tar.gz archive."""
    format = (
        "".join(archive_path.suffixes[-2:])
        if len(archive_path.suffixes) > 1
        else archive_path.suffix
    )

    archive_handlers = {
        ".zip": zipfile.ZipFile,
        ".tar.gz": tarfile.open,
        ".tgz": tarfile.open,
    }

    handler = archive_handlers.get(format)
    if not handler:
        raise AcquisitionError(f"Unsupported archive format: {format}")

    try:
        with handler(archive_path) as archive:
            all_files = get_archive_files(archive)

            matching_files = [
                f for f in all_files
                if f == binary_name or f.endswith(f"/{binary_name}")
            ]
            if not matching_files:
                logger.error({
                    "event": "binary_not_found",
                    "archive": str(archive_path),
                    "binary_name": binary_name,
                    "available_files": all_files
                })
                raise AcquisitionError(f"Binary {binary_name} not found in archive")

            target = matching_files[0]
            if isinstance(archive, tarfile.TarFile) and hasattr(tarfile, "data_filter"):
                archive.extract(target, dest_dir, filter="data")
            else:
                archive.extract(target, dest_dir)
            extracted_path = Path(dest_dir) / target

    # gzip reports a truncated stream as EOFError
    except (tarfile.TarError, zipfile.BadZipFile, zlib.error, EOFError, OSError) as e:
        logger.error({
            "event": "extract_failed",
            "archive": str(archive_path),
            "format": format,
            "error": str(e)
        })
        raise AcquisitionError(f"Failed to extract from {archive_path.name}") from e

    if not extracted_path.is_file():
        raise AcquisitionError("Failed to extract binary - file missing after extraction")

    logger.debug({
        "event": "binary_extracted",
        "archive": str(archive_path),
        "extracted_to": str(extracted_path)
    })

    return extracted_path


async def download_release(target: TargetTriple, config: BootstrapConfig) -> Path:
    """Download the latest release for target into config.install_path.

    Raises:
        AcquisitionError: If any step fails; install_path is left untouched
    """
    # Scratch space goes away on every exit path, including errors
    with tempfile.TemporaryDirectory(prefix="remix-browser-") as tmpdir:
        tmp_path = Path(tmpdir)

        async with aiohttp.ClientSession() as session:
            version = await fetch_latest_release_version(session, config)
            if not version:
                raise AcquisitionError("Could not determine latest version")

            descriptor = archive_descriptor(target, version, config)
            logger.info({
                "event": "downloading_release",
                "version": version,
                "target": str(target),
                "url": descriptor.download_url
            })

            archive_path = tmp_path / descriptor.filename
            await download_file(session, descriptor.download_url, archive_path)

        extracted = extract_binary(archive_path, config.binary_name, tmp_path / "extracted")
        installed = install_binary(extracted, config.install_path)

    logger.info({
        "event": "binary_ready",
        "version": version,
        "path": str(installed)
    })
    return installed


async def fetch_binary(target: TargetTriple, config: BootstrapConfig) -> bool:
    """Install the prebuilt binary for target. Never raises."""
    try:
        await download_release(target, config)
        return True
    except (AcquisitionError, aiohttp.ClientError, asyncio.TimeoutError,
            OSError, ValueError) as e:
        logger.warning({
            "event": "prebuilt_unavailable",
            "target": str(target),
            "error": str(e)
        })
        return False
