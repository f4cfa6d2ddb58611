"""
Remote directory client for IP camera web interfaces.

Fetches HTML directory listings and JSON API documents from a camera and
streams record files to local storage. Transport errors and non-200
responses are logged and turned into empty results so one unreachable
directory does not end a sweep. Requests are never retried.
"""

import logging
from pathlib import Path
from typing import Optional

import requests
from bs4 import BeautifulSoup

from utils.http import SessionManager

logger = logging.getLogger(__name__)

# Optimization: Try to use lxml parser (3-5x faster), fall back to html.parser
try:
    import lxml  # noqa: F401
    PARSER = "lxml"
except ImportError:
    PARSER = "html.parser"

# Leading table rows of a firmware listing hold the header and parent links
HEADER_ROWS = 3

DEFAULT_TIMEOUT = 5
DEFAULT_DOWNLOAD_TIMEOUT = 120
DEFAULT_CHUNK_SIZE = 8192


def parse_table_entries(html: str) -> list[str]:
    """Return the anchor text of each data row of a listing table."""
    soup = BeautifulSoup(html, PARSER)
    rows = soup.select("table > tbody > tr") or soup.select("table > tr")
    entries = []
    for row in rows[HEADER_ROWS:]:
        anchor = row.find("a")
        if anchor is not None:
            entries.append(anchor.get_text().strip())
    return entries


class RemoteDirectoryClient:
    """HTTP access to one camera with fixed headers and timeouts."""

    def __init__(self, headers: Optional[dict] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            headers: Headers sent with every request (e.g. Authorization)
            timeout: Seconds to wait for listing and search responses
            download_timeout: Seconds to wait between bytes of a download
            chunk_size: Bytes read per iteration while streaming a file
            session: Existing session to use; a pooled one is created if None
        """
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.download_timeout = download_timeout
        self.chunk_size = chunk_size
        self._manager = None
        if session is None:
            self._manager = SessionManager()
            session = self._manager.session
        self.session = session

    def close(self) -> None:
        if self._manager is not None:
            self._manager.close()

    def fetch_raw(self, url: str, method: str = "GET",
                  payload=None) -> Optional[requests.Response]:
        """Send one request and return the response if its status is 200.

        Returns None, after logging, on transport errors and other statuses.
        """
        try:
            resp = self.session.request(
                method, url, headers=self.headers, json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Request failed: %s", exc, extra={"url": url})
            return None

        if resp.status_code != 200:
            logger.error("Request failed: HTTP %s for %s", resp.status_code, url,
                         extra={"url": url, "status": resp.status_code})
            return None
        return resp

    def list_entries(self, url: str) -> list[str]:
        """Return the item names of an HTML directory listing."""
        resp = self.fetch_raw(url)
        if resp is None:
            return []
        return parse_table_entries(resp.text)

    def search(self, url: str, payload) -> Optional[object]:
        """POST a JSON command and return the decoded response document."""
        resp = self.fetch_raw(url, method="POST", payload=payload)
        if resp is None:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Request failed: invalid JSON from %s (%s)", url, exc,
                         extra={"url": url})
            return None

    def download(self, url: str, dest_path: Path, tracker=None) -> bool:
        """Stream ``url`` into ``dest_path``, reporting byte progress.

        Returns True on success. On a transport error or a non-200 status
        the partial file is removed and False is returned. Local write
        errors propagate.
        """
        fname = dest_path.name
        downloaded = 0
        try:
            resp = self.session.get(url, headers=self.headers,
                                    timeout=self.download_timeout, stream=True)
            resp.raise_for_status()
            total_size = int(resp.headers.get("content-length", 0) or 0)

            dest_path.parent.mkdir(parents=True, exist_ok=True)
            with open(dest_path, "wb") as f:
                for chunk in resp.iter_content(chunk_size=self.chunk_size):
                    if not chunk:
                        continue
                    f.write(chunk)
                    downloaded += len(chunk)
                    if tracker:
                        tracker.file_progress(fname, downloaded, total_size)
        except requests.RequestException as exc:
            dest_path.unlink(missing_ok=True)
            logger.error("Request failed: %s for %s", exc, fname,
                         extra={"url": url, "record": fname})
            if tracker:
                tracker.file_done(fname, 0, ok=False)
            return False

        if tracker:
            tracker.file_done(fname, downloaded)
        return True
