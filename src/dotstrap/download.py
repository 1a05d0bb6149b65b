"""Release artifact downloads with a size-based integrity check."""

from __future__ import annotations

import json
import logging
import shutil
import ssl
import urllib.error
import urllib.request
from pathlib import Path

from dotstrap.errors import InstallError

logger = logging.getLogger(__name__)

# Anything smaller is treated as a truncated download or an error page
MIN_ARTIFACT_BYTES = 1_000_000

CHUNK_SIZE = 8192


def download(url: str, dest: Path, min_bytes: int = MIN_ARTIFACT_BYTES) -> Path:
    """Download a file and reject it if it is implausibly small.

    Args:
        url: URL to fetch.
        dest: Destination file path.
        min_bytes: Minimum acceptable size in bytes.

    Returns:
        Path to the downloaded file.

    Raises:
        InstallError: If the download fails or the file is smaller than
            ``min_bytes``. The partial file is removed in both cases.
    """
    logger.debug("Downloading %s to %s", url, dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        request = urllib.request.Request(url, headers={"User-Agent": "dotstrap"})
        with urllib.request.urlopen(
            request, timeout=60, context=ssl.create_default_context()
        ) as response, open(dest, "wb") as f:
            shutil.copyfileobj(response, f, CHUNK_SIZE)
    except (urllib.error.URLError, OSError) as e:
        dest.unlink(missing_ok=True)
        raise InstallError(f"Failed to download {url}: {e}") from e

    verify_artifact(dest, min_bytes)
    return dest


def verify_artifact(path: Path, min_bytes: int = MIN_ARTIFACT_BYTES) -> None:
    """Check that an artifact exists and meets the size floor.

    Args:
        path: Downloaded file.
        min_bytes: Minimum acceptable size in bytes.

    Raises:
        InstallError: If the file is missing or too small; a too-small file
            is deleted.
    """
    if not path.is_file():
        raise InstallError(f"Download failed: {path} not found")
    size = path.stat().st_size
    if size < min_bytes:
        path.unlink(missing_ok=True)
        raise InstallError(
            f"Downloaded file too small ({size} bytes, expected at least {min_bytes})"
        )


def latest_release_tag(owner: str, repo: str) -> str | None:
    """Query the GitHub API for the latest release tag of a repository.

    Args:
        owner: Repository owner.
        repo: Repository name.

    Returns:
        Tag name if found, None when the API is unreachable or returns no tag.
    """
    api_url = f"https://api.github.com/repos/{owner}/{repo}/releases/latest"
    try:
        request = urllib.request.Request(
            api_url,
            headers={"Accept": "application/vnd.github.v3+json"},
        )
        with urllib.request.urlopen(
            request, timeout=10, context=ssl.create_default_context()
        ) as response:
            data = json.loads(response.read().decode("utf-8"))
    except (urllib.error.URLError, OSError, ValueError) as e:
        logger.debug("GitHub API query failed: %s", e)
        return None

    tag = data.get("tag_name")
    if tag:
        logger.debug("GitHub API returned latest release: %s", tag)
    return tag
