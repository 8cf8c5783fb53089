import aiohttp
import pytest

from remix_bootstrap.binaries.releases import (
    extract_tag_name,
    fetch_latest_release_version,
    latest_release_url,
)


def test_extract_tag_name_first_occurrence():
    """Test the first tag_name wins, without needing valid JSON"""
    body = '{"url": "x", "tag_name" : "v1.2.3", "assets": [{"tag_name": "v0.0.1"}]'
    assert extract_tag_name(body) == "v1.2.3"


def test_extract_tag_name_pretty_printed():
    body = '{\n  "id": 1,\n  "tag_name": "v2.0.0-rc.1",\n  "name": "RC"\n}'
    assert extract_tag_name(body) == "v2.0.0-rc.1"


@pytest.mark.parametrize(
    "body",
    ['{"message": "Not Found"}', '{"tag_name": ""}', "", "<html>rate limited</html>"],
)
def test_extract_tag_name_missing(body):
    assert extract_tag_name(body) is None


def test_latest_release_url(config):
    assert latest_release_url(config) == (
        "http://127.0.0.1:9/repos/hkd987/remix-browser/releases/latest"
    )


@pytest.mark.asyncio
async def test_fetch_latest_release_version(release_service, make_config):
    """Test the tag is read from the metadata endpoint unmodified"""
    config = make_config(api_base=release_service.base_url)

    async with aiohttp.ClientSession() as session:
        version = await fetch_latest_release_version(session, config)

    assert version == "v1.2.3"
    assert release_service.requests == ["/repos/hkd987/remix-browser/releases/latest"]


@pytest.mark.asyncio
async def test_fetch_latest_release_version_no_tag(release_service, make_config, log_records):
    release_service.latest_body = '{"message": "Not Found"}'
    config = make_config(api_base=release_service.base_url)

    async with aiohttp.ClientSession() as session:
        assert await fetch_latest_release_version(session, config) is None

    assert "release_tag_missing" in log_records.events()


@pytest.mark.asyncio
async def test_fetch_latest_release_version_http_error(release_service, make_config):
    release_service.latest_status = 404
    config = make_config(api_base=release_service.base_url)

    async with aiohttp.ClientSession() as session:
        with pytest.raises(aiohttp.ClientResponseError):
            await fetch_latest_release_version(session, config)
