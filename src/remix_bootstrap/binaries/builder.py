"""Fallback: build the binary from the local cargo project."""
import shutil

from remix_bootstrap.binaries.constants import CARGO_RELEASE_DIR
from remix_bootstrap.binaries.project import is_project_checkout
from remix_bootstrap.errors import BuildError
from remix_bootstrap.logging import get_logger
from remix_bootstrap.types import BootstrapConfig, TargetTriple
from remix_bootstrap.utils.fs import async_subprocess_stream, install_binary

logger = get_logger(__name__)

# Lines of cargo output kept in the failure log
OUTPUT_TAIL_LINES = 20


async def run_release_build(config: BootstrapConfig) -> None:
    """Run ``cargo build --release`` and install the artifact.

    Raises:
        BuildError: If the toolchain or project is missing, or the build fails
    """
    cargo = shutil.which(config.build_command)
    if not cargo:
        raise BuildError(f"Build toolchain not found: {config.build_command}")

    if not is_project_checkout(config.project_dir):
        raise BuildError(f"No remix-browser cargo project at {config.project_dir}")

    logger.info({"event": "building_from_source", "project_dir": str(config.project_dir)})

    # Progress goes to our stderr; stdout belongs to the binary we hand off to
    returncode, output = await async_subprocess_stream(
        cargo, "build", "--release", cwd=config.project_dir
    )
    if returncode != 0:
        logger.error({
            "event": "build_failed",
            "returncode": returncode,
            "output": "\n".join(output.splitlines()[-OUTPUT_TAIL_LINES:])
        })
        raise BuildError("cargo build --release failed", returncode=returncode)

    artifact = config.project_dir.joinpath(*CARGO_RELEASE_DIR, config.binary_name)
    if not artifact.is_file():
        raise BuildError(f"Build succeeded but {artifact} is missing")

    install_binary(artifact, config.install_path)
    logger.info({"event": "binary_ready", "path": str(config.install_path)})


async def build_from_source(target: TargetTriple, config: BootstrapConfig) -> bool:
    """Build and install the binary for the host. Never raises."""
    try:
        await run_release_build(config)
        return True
    except (BuildError, OSError, ValueError) as e:
        logger.warning({
            "event": "source_build_unavailable",
            "target": str(target),
            "error": str(e)
        })
        return False
