import io
import logging
import tarfile
import zipfile
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from remix_bootstrap.logging import APP_LOGGER
from remix_bootstrap.types import BootstrapConfig

BINARY_CONTENT = b"#!/bin/sh\necho remix-browser\n"

# Nothing listens on the discard port; any request fails fast
UNREACHABLE = "http://127.0.0.1:9"


def make_tar_gz(path: Path, members: dict[str, bytes]) -> Path:
    """Names ending in "/" become directory entries."""
    with tarfile.open(path, "w:gz") as tf:
        for name, content in members.items():
            if name.endswith("/"):
                info = tarfile.TarInfo(name.rstrip("/"))
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tf.addfile(info)
                continue
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(content))
    return path


def make_zip(path: Path, members: dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def make_config(tmp_path: Path):
    """Factory for an isolated config rooted in tmp_path"""
    def factory(**overrides) -> BootstrapConfig:
        values = dict(
            owner="hkd987",
            repo="remix-browser",
            binary_name="remix-browser",
            project_dir=tmp_path / "project",
            install_dir=tmp_path / "project" / "bin",
            home=tmp_path / "home",
            system_bin_dir=tmp_path / "usr-local-bin",
            path_env="/usr/bin:/bin",
            os_name="Linux",
            machine="x86_64",
            api_base=UNREACHABLE,
            download_base=UNREACHABLE,
            build_command="remix-test-no-such-cargo",
        )
        values.update(overrides)
        return BootstrapConfig(**values)

    return factory


@pytest.fixture
def config(make_config) -> BootstrapConfig:
    return make_config()


@pytest.fixture
def fake_binary(tmp_path: Path) -> Path:
    binary = tmp_path / "fake-remix-browser"
    binary.write_bytes(BINARY_CONTENT)
    binary.chmod(0o755)
    return binary


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    def events(self) -> list[str]:
        return [r.msg.get("event") for r in self.records if isinstance(r.msg, dict)]


@pytest.fixture
def log_records():
    """Capture records from the package logger, whatever its propagate setting"""
    app_logger = logging.getLogger(APP_LOGGER)
    handler = RecordingHandler()
    old_level = app_logger.level
    app_logger.addHandler(handler)
    app_logger.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        app_logger.removeHandler(handler)
        app_logger.setLevel(old_level)


class ReleaseService:
    """In-process stand-in for the GitHub release endpoints"""

    def __init__(self):
        self.latest_body = '{"tag_name": "v1.2.3"}'
        # Served verbatim instead of latest_body when set
        self.latest_raw: Optional[bytes] = None
        self.latest_status = 200
        self.assets: dict[str, bytes] = {}
        self.requests: list[str] = []
        self.base_url = ""

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/repos/{owner}/{repo}/releases/latest", self.latest)
        app.router.add_get(
            "/{owner}/{repo}/releases/download/{tag}/{filename}", self.download
        )
        return app

    async def latest(self, request: web.Request) -> web.Response:
        self.requests.append(request.path)
        if self.latest_raw is not None:
            return web.Response(
                body=self.latest_raw,
                status=self.latest_status,
                content_type="application/json",
                charset="utf-8",
            )
        return web.Response(
            text=self.latest_body,
            status=self.latest_status,
            content_type="application/json",
        )

    async def download(self, request: web.Request) -> web.Response:
        self.requests.append(request.path)
        key = f"{request.match_info['tag']}/{request.match_info['filename']}"
        if key not in self.assets:
            raise web.HTTPNotFound()
        return web.Response(body=self.assets[key])


@pytest_asyncio.fixture
async def release_service():
    """Serve fake release metadata and archives on localhost"""
    service = ReleaseService()
    server = TestServer(service.app())
    await server.start_server()
    service.base_url = str(server.make_url("")).rstrip("/")
    try:
        yield service
    finally:
        await server.close()


@pytest.fixture
def tar_gz_factory():
    return make_tar_gz


@pytest.fixture
def zip_factory():
    return make_zip


@pytest.fixture
def release_archive(tmp_path: Path) -> bytes:
    """A POSIX release archive as published: binary at the archive root"""
    path = make_tar_gz(tmp_path / "release.tar.gz", {"remix-browser": BINARY_CONTENT})
    return path.read_bytes()
