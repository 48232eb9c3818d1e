"""Pexels client for city photos, plus a proxy for allow-listed image hosts."""

import logging
from urllib.parse import urljoin, urlparse

import requests

from config import PEXELS_API_KEY

logger = logging.getLogger(__name__)

BASE_URL = "https://api.pexels.com/v1"
TIMEOUT = 15
MAX_REDIRECTS = 5
RESULTS_PER_CITY = 3
SIZE_PARAMS = "auto=compress&cs=tinysrgb&w=800&h=600&fit=crop"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

FALLBACK_IMAGES = [
    f"https://images.pexels.com/photos/{photo_id}/pexels-photo-{photo_id}.jpeg?{SIZE_PARAMS}"
    for photo_id in (417074, 417049, 417078)
]

ALLOWED_DOMAINS = (
    "source.unsplash.com",
    "images.unsplash.com",
    "unsplash.com",
    "images.pexels.com",
    "pexels.com",
    "api.pexels.com",
)


class ProxyError(Exception):
    """Proxy request refused or failed; carries the HTTP status to answer with."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


def _sized(url: str) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{SIZE_PARAMS}"


def is_allowed_host(hostname: str | None) -> bool:
    if not hostname:
        return False
    hostname = hostname.lower()
    return any(hostname == d or hostname.endswith("." + d) for d in ALLOWED_DOMAINS)


class PexelsClient:
    """Client for the Pexels photo search API."""

    def __init__(self, api_key: str = None, session: requests.Session = None):
        self.api_key = api_key if api_key is not None else PEXELS_API_KEY
        self.session = session or requests.Session()

    def search_city_images(self, city: str = "liverpool") -> list[str]:
        """Three landscape photo URLs for a UK city; fixed photos when search is unavailable."""
        query = f"{(city or 'liverpool').lower()} uk"
        if not self.api_key:
            logger.info("PEXELS_API_KEY not configured, using fallback city images")
            return list(FALLBACK_IMAGES)

        try:
            resp = self.session.get(
                f"{BASE_URL}/search",
                params={"query": query, "per_page": RESULTS_PER_CITY, "orientation": "landscape"},
                headers={"Authorization": self.api_key},
                timeout=TIMEOUT,
            )
            resp.raise_for_status()
            photos = resp.json().get("photos") or []
            images = [_sized(p["src"]["large"]) for p in photos if p.get("src", {}).get("large")]
            if images:
                logger.info(f"Found {len(images)} images for '{query}' from Pexels")
                return images
            logger.info(f"No Pexels results for '{query}', using fallback city images")
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Pexels API error for '{query}': {e}")
        return list(FALLBACK_IMAGES)

    def fetch_image(self, url: str) -> tuple[bytes, str]:
        """Fetch an image from an allow-listed host, following up to MAX_REDIRECTS redirects.

        Returns (content, content_type). Raises ProxyError with 400 for a bad URL,
        403 for a host outside the allow list and 503 when the upstream fails.
        """
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ProxyError("Invalid URL", 400)
        if not is_allowed_host(parsed.hostname):
            raise ProxyError("Domain not allowed", 403)

        current = url
        for _ in range(MAX_REDIRECTS + 1):
            try:
                resp = self.session.get(
                    current, headers={"User-Agent": USER_AGENT}, timeout=TIMEOUT, allow_redirects=False
                )
            except requests.RequestException as e:
                logger.warning(f"Image fetch failed for {current}: {e}")
                raise ProxyError(f"Failed to fetch image: {e}", 503) from e

            location = resp.headers.get("Location")
            if 300 <= resp.status_code < 400 and location:
                current = urljoin(current, location)
                target = urlparse(current)
                if target.scheme not in ("http", "https") or not is_allowed_host(target.hostname):
                    logger.warning(f"Refusing redirect to {current}")
                    raise ProxyError("Domain not allowed", 403)
                logger.info(f"Following redirect to {current}")
                continue
            if resp.status_code != 200:
                logger.warning(f"Image fetch failed with status {resp.status_code} for {current}")
                raise ProxyError(f"Failed to fetch image: {resp.status_code}", 503)
            return resp.content, resp.headers.get("Content-Type") or "image/jpeg"

        raise ProxyError("Too many redirects", 503)
