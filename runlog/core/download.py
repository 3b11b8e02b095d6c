"""Download a remote screenshot attachment to a local file."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


class DownloadError(RuntimeError):
    """Raised when an image cannot be fetched after retries."""


def download_image(
    url: str,
    dest: Path,
    timeout_seconds: int = 30,
    max_retries: int = 3,
) -> Path:
    """Fetch url into dest, retrying transient failures with backoff."""
    last_error: Optional[Exception] = None

    for attempt in range(1, max_retries + 1):
        try:
            response = requests.get(url, timeout=timeout_seconds)
            if response.status_code in RETRYABLE_STATUS:
                raise requests.HTTPError(response.text, response=response)
            if response.status_code >= 400:
                raise DownloadError(
                    f"Image download failed for {url}: HTTP {response.status_code}"
                )

            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(response.content)
            logger.info("Downloaded image into %s", dest)
            return dest
        except requests.RequestException as exc:
            last_error = exc
            logger.warning("Image download attempt %d failed: %s", attempt, exc)
            if attempt >= max_retries:
                break
            time.sleep(min(2**attempt, 8))
        except OSError as exc:
            raise DownloadError(f"Error writing image to {dest}: {exc}") from exc

    raise DownloadError(f"Image download failed for {url}: {last_error}")
