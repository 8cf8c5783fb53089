"""Latest release lookup."""
import re
from typing import Optional

import aiohttp

from remix_bootstrap.binaries.constants import (
    GITHUB_REPOS_PATH,
    LATEST_PATH,
    RELEASES_PATH,
)
from remix_bootstrap.logging import get_logger
from remix_bootstrap.types import BootstrapConfig

logger = get_logger(__name__)

# Only the tag is needed; the rest of the payload is not ours to validate
TAG_NAME_PATTERN = re.compile(r'"tag_name"\s*:\s*"([^"]*)"')


def latest_release_url(config: BootstrapConfig) -> str:
    return (
        f"{config.api_base}/{GITHUB_REPOS_PATH}/{config.owner}/{config.repo}"
        f"/{RELEASES_PATH}/{LATEST_PATH}"
    )


def extract_tag_name(body: str) -> Optional[str]:
    """Return the first tag_name value in a release payload, if any."""
    match = TAG_NAME_PATTERN.search(body)
    if not match or not match.group(1):
        return None
    return match.group(1)


async def fetch_latest_release_version(
    session: aiohttp.ClientSession, config: BootstrapConfig
) -> Optional[str]:
    """Fetch the latest release tag, e.g. ``v1.2.3``."""
    url = latest_release_url(config)
    logger.debug({"event": "fetching_latest_release", "url": url})

    async with session.get(url) as response:
        response.raise_for_status()
        body = await response.text(errors="replace")

    version = extract_tag_name(body)
    if version is None:
        logger.warning({"event": "release_tag_missing", "url": url})
    return version
