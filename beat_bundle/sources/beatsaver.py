"""Resolve BeatSaver keys and download map archives."""

from __future__ import annotations

import logging
import re

import requests
from pydantic import BaseModel, Field

from beat_bundle.errors import InvalidReferenceError, RemoteFetchError

BASE_URL = "https://api.beatsaver.com"
DOWNLOAD_BASE_URL = "https://beatsaver.com"
USER_AGENT = "BeatBundle/0.1.0"

logger = logging.getLogger(__name__)

_KEY = r"([0-9A-Za-z]+)"

# Accepted locators; the key is always the last non-empty path segment.
_REFERENCE_PATTERNS = (
    re.compile(rf"^https://[^/\s]+/api/download/key/{_KEY}/?$"),
    re.compile(rf"^https://[^/\s]+/beatmap/{_KEY}/?$"),
    # custom schemes such as beatsaver://570 (one-click install links)
    re.compile(rf"^(?!https?://)[A-Za-z][A-Za-z0-9+.-]*://{_KEY}/?$"),
)
_BARE_KEY = re.compile(rf"^{_KEY}$")


def extract_key(reference: str) -> str:
    """Return the BeatSaver key named by a bare key or a locator URL.

    Raises:
        InvalidReferenceError: If the reference matches no known pattern.
    """
    reference = reference.strip()
    match = _BARE_KEY.match(reference)
    if match:
        return match.group(1)
    for pattern in _REFERENCE_PATTERNS:
        match = pattern.match(reference)
        if match:
            return match.group(1)
    raise InvalidReferenceError(f"Not a BeatSaver key or map URL: {reference!r}")


class BeatSaverVersion(BaseModel):
    """One uploaded version of a map; only the download link is used."""

    download_url: str = Field(alias="downloadURL")


class BeatSaverMap(BaseModel):
    """The subset of the ``maps/id/{key}`` response the client reads."""

    id: str
    versions: list[BeatSaverVersion]


class BeatSaverClient:
    def __init__(
        self,
        base_url: str = BASE_URL,
        download_url: str = DOWNLOAD_BASE_URL,
        user_agent: str = USER_AGENT,
    ):
        self.base_url = base_url.rstrip("/")
        self.download_url = download_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def map_info(self, key: str) -> BeatSaverMap:
        """Fetch the BeatSaver map document for ``key``."""
        try:
            response = self.session.get(f"{self.base_url}/maps/id/{key}")
            response.raise_for_status()
            return BeatSaverMap.model_validate(response.json())
        except (requests.RequestException, ValueError) as exc:
            raise RemoteFetchError(f"Failed to look up map {key}: {exc}") from exc

    def download_archive(self, reference: str) -> tuple[str, bytes]:
        """Download the latest version of a map as zip bytes.

        Returns:
            (key, archive_bytes)
        """
        key = extract_key(reference)
        map_info = self.map_info(key)
        if not map_info.versions:
            raise RemoteFetchError(f"Map {key} has no downloadable version")
        download_url = map_info.versions[0].download_url
        if download_url.startswith("/"):
            download_url = f"{self.download_url}{download_url}"

        logger.info("Downloading map %s from %s", key, download_url)
        try:
            response = self.session.get(download_url)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise RemoteFetchError(f"Failed to download map {key}: {exc}") from exc
        return key, response.content
