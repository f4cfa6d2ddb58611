"""HTTP session utilities for ipcamsd.

Provides a pooled ``requests.Session`` factory. Camera firmwares tolerate
only a few concurrent connections and the tools never retry on their own, so
sessions are mounted with retries disabled.
"""

from typing import Optional

import requests
from requests.adapters import HTTPAdapter


class SessionManager:
    """Manages HTTP sessions with connection pooling and no retries."""

    def __init__(self, pool_connections: int = 1, pool_maxsize: int = 1,
                 headers: Optional[dict] = None):
        """Initialize session manager.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections per pool
            headers: Default headers sent with every request
        """
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self.headers = dict(headers or {})
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create HTTP session with pooling.

        Returns:
            requests.Session object
        """
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.headers)

            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=self.pool_connections,
                pool_maxsize=self.pool_maxsize,
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

        return self._session

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
