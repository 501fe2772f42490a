"""
HTTP download of the source image.

The server shares one requests Session across conversions. Every fetch
carries a timeout.
"""

from __future__ import annotations

import logging

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "webpify/0.1"


def new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


def fetch_image_bytes(
    url: str,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> bytes:
    """
    Download url and return the body.

    Raises:
        FetchError: On connection failure, invalid URL, timeout or non-2xx status
    """
    http = session or requests
    logger.debug("Fetching %s", url)
    try:
        resp = http.get(url, timeout=timeout)
    except requests.Timeout as e:
        raise FetchError(url, f"Timeout after {timeout}s fetching {url}") from e
    except requests.RequestException as e:
        raise FetchError(url, f"Failed to fetch {url}: {e}") from e

    # 1xx and 3xx count as failures too
    if not 200 <= resp.status_code < 300:
        raise FetchError(
            url,
            f"Failed to fetch {url}: HTTP {resp.status_code}",
            status_code=resp.status_code,
        )

    logger.info("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.content
