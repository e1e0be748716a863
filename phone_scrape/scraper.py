"""HTTP fetching for the catalog page."""

from typing import Optional

import requests  # type: ignore[import-untyped]

from phone_scrape.config import CATALOG_URL, HEADERS, REQUEST_TIMEOUT
from phone_scrape.logging_config import get_logger, log_scrape_event

__all__ = ["FetchError", "create_session", "fetch_html"]

logger = get_logger("scraper")


class FetchError(ValueError):
    """Raised when the catalog page cannot be retrieved. Aborts the run."""
    pass


def create_session() -> requests.Session:
    """Create a requests Session carrying the browser-like headers.

    The same session is reused for image downloads so the keep-alive
    connection and any cookies the shop sets are shared.
    """
    session = requests.Session()
    session.headers.update(HEADERS)
    session.headers.setdefault("Accept-Encoding", "gzip, deflate")
    return session


def fetch_html(
    url: str = CATALOG_URL,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> str:
    """Single GET of the catalog page. No retries.

    Args:
        url: Catalog URL
        session: Optional session for connection reuse
        timeout: Seconds before the request is abandoned

    Returns:
        HTML content as string

    Raises:
        FetchError: On any network error, timeout or HTTP error status
    """
    sess = session or create_session()
    logger.info(f"Fetching catalog: {url}")

    try:
        resp = sess.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else "unknown"
        reason = e.response.reason if e.response is not None else "unknown"
        raise FetchError(
            f"HTTP Error {status_code}: {reason}\n"
            f"Failed to fetch: {url}"
        ) from e
    except requests.exceptions.Timeout as e:
        raise FetchError(
            f"Timeout fetching {url} after {timeout:.0f}s: {e}\n"
            f"The shop may be overloaded. Try again later or raise the timeout."
        ) from e
    except requests.exceptions.RequestException as e:
        raise FetchError(
            f"Failed to fetch {url}: {e}\n"
            f"Please check your internet connection and verify the URL is accessible."
        ) from e

    html = str(resp.text)
    log_scrape_event("catalog_fetched", {
        "message": f"Fetched catalog ({len(html)} bytes)",
        "url": url,
        "status_code": resp.status_code,
        "bytes": len(html),
    })
    return html
