"""
Thin HTTP transport for the GitHub REST endpoints the crawler uses.
"""

import logging
import random
import time
from typing import Any, Dict, Optional

import requests

from .. import __version__
from ..config import CrawlerOptions
from ..error_handling import TransportError
from .credentials import select_credentials

logger = logging.getLogger(__name__)

RAW_CONTENT_MEDIA_TYPE = "application/vnd.github.v3.raw"
RETRYABLE_ERRORS = (requests.exceptions.ConnectionError, requests.exceptions.Timeout)
MAX_BACKOFF_SECONDS = 30


class GitHubClient:
    """
    GitHub API client bound to one set of crawler options.
    
    Connection errors and timeouts are retried with exponential backoff
    up to ``options.max_retries`` times and then surface as
    :class:`TransportError`. HTTP error statuses are returned to the
    caller untouched; deciding what a status means is not the
    transport's job.
    """
    
    def __init__(self, options: CrawlerOptions, session: Optional[requests.Session] = None):
        """
        Initialize GitHub API client.
        
        Args:
            options: Crawler options (base URL, credentials, timeout, retries)
            session: Preconfigured session, mainly for tests
        """
        self.base_url = options.api_base_url
        self.timeout = options.timeout
        self.credentials = select_credentials(options)
        
        self.session = session or requests.Session()
        self._setup_session()
        
        self.max_retries = options.max_retries
    
    def _setup_session(self) -> None:
        """Set up the requests session with headers and authentication."""
        self.session.headers.update({
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"project-crawler/{__version__}"
        })
        self.credentials.apply(self.session)
    
    def _url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
    
    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        """Send a request, retrying connection errors and timeouts with backoff."""
        for attempt in range(self.max_retries + 1):
            try:
                return self.session.request(method=method, url=url, timeout=self.timeout, **kwargs)
            except RETRYABLE_ERRORS as e:
                if attempt == self.max_retries:
                    raise
                wait_time = min(2 ** attempt, MAX_BACKOFF_SECONDS) * (0.5 + random.random() * 0.5)
                logger.warning(f"Request failed: {e}. Retrying in {wait_time:.2f} seconds")
                time.sleep(wait_time)
        raise AssertionError("unreachable")
    
    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> requests.Response:
        """
        Send a request to the GitHub API.
        
        Args:
            method: HTTP method
            endpoint: API endpoint relative to the base URL
            params: Query parameters
            **kwargs: Additional arguments for ``requests``
            
        Returns:
            Response object, whatever its status
            
        Raises:
            TransportError: If no response could be obtained
        """
        url = self._url(endpoint)
        try:
            response = self._send(method, url, params=params, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} request to GitHub failed", url=url, cause=e)
        
        logger.debug(
            f"{method} {url} -> {response.status_code}",
            extra={"url": url, "status": response.status_code}
        )
        return response
    
    def list_org_repos(self, org: str, page: int) -> requests.Response:
        """Fetch one page of an organization's repositories."""
        return self.request("GET", f"orgs/{org}/repos", params={"page": page})
    
    def list_user_repos(self, user: str, page: int) -> requests.Response:
        """Fetch one page of a user's repositories."""
        return self.request("GET", f"users/{user}/repos", params={"page": page})
    
    def open_raw_content(self, org: str, repo: str, branch: str, file_path: str) -> requests.Response:
        """
        Open a streamed response with the raw bytes of a file.
        
        The caller owns the response and must close it.
        """
        return self.request(
            "GET",
            self._contents_endpoint(org, repo, file_path),
            params={"ref": branch},
            headers={"Accept": RAW_CONTENT_MEDIA_TYPE},
            stream=True
        )
    
    def head_content(self, org: str, repo: str, branch: str, file_path: str) -> requests.Response:
        """Send a HEAD request for a file, returning the bare response."""
        return self.request(
            "HEAD",
            self._contents_endpoint(org, repo, file_path),
            params={"ref": branch}
        )
    
    @staticmethod
    def _contents_endpoint(org: str, repo: str, file_path: str) -> str:
        return f"repos/{org}/{repo}/contents/{file_path.lstrip('/')}"
    
    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
