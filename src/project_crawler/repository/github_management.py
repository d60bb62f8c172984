"""
GitHub implementation of repository management.
"""

import logging
from typing import List, Optional

import requests

from ..config import CrawlerOptions
from ..models import Repository
from .base import RepositoryManagement
from .github_client import GitHubClient
from .merger import merge_manual_projects
from .normalizer import normalize
from .pagination import list_raw_pages

logger = logging.getLogger(__name__)


class GithubRepositoryManagement(RepositoryManagement):
    """
    Lists an organization's (or user's) repositories on GitHub and reads files.
    
    The management object holds one HTTP session and the options snapshot
    it was created with; it keeps no other state between calls.
    """
    
    def __init__(self, options: CrawlerOptions, client: Optional[GitHubClient] = None):
        """
        Initialize GitHub repository management.
        
        Args:
            options: Crawler options
            client: GitHub transport (built from ``options`` when omitted)
        """
        self.options = options
        self.client = client or GitHubClient(options)
    
    def repositories(self, org: str) -> List[Repository]:
        """
        List every tracked repository of ``org``.
        
        Raises:
            TransportError: If GitHub cannot be reached
            UnexpectedStatusError: If neither the org nor the user listing exists
            MalformedRecordError: If a listing page cannot be parsed
        """
        pages = list_raw_pages(self.client, org)
        listed = normalize(pages, self.options)
        repositories = merge_manual_projects(org, listed, self.options)
        logger.info(f"Found {len(repositories)} repositories for {org}", extra={"org": org})
        return repositories
    
    def file_content(self, org: str, repo: str, branch: str, file_path: str) -> str:
        """
        Return the text of ``file_path`` on ``branch``.
        
        Failing to connect raises :class:`TransportError`. Once a response
        has arrived, every failure (error status, broken stream, undecodable
        bytes) is logged and yields an empty string.
        """
        response = self.client.open_raw_content(org, repo, branch, file_path)
        try:
            with response:
                if not response.ok:
                    self._warn_unreadable(f"HTTP {response.status_code}", org, repo, branch, file_path)
                    return ""
                content = response.content.decode("utf-8")
        except (requests.exceptions.RequestException, UnicodeDecodeError, OSError) as e:
            self._warn_unreadable(e, org, repo, branch, file_path)
            return ""

        logger.debug(f"File [{file_path}] for branch [{branch}] org [{org}] and repo [{repo}] exists")
        return content

    @staticmethod
    def _warn_unreadable(reason, org: str, repo: str, branch: str, file_path: str) -> None:
        logger.warning(
            f"Exception [{reason}] occurred when retrieving file [{file_path}] "
            f"for branch [{branch}] org [{org}] and repo [{repo}]",
            extra={"org": org, "repo": repo, "branch": branch, "file_path": file_path}
        )
    
    def descriptor_exists(self, org: str, repo: str, branch: str, file_path: str) -> bool:
        """
        Check whether ``file_path`` exists on ``branch``.
        
        Only a 2xx answer counts as existing; any other status is logged
        and reported as missing.
        
        Raises:
            TransportError: If GitHub cannot be reached
        """
        response = self.client.head_content(org, repo, branch, file_path)
        if 200 <= response.status_code < 300:
            return True
        if response.status_code != 404:
            logger.warning(
                f"Status [{response.status_code}] was returned when checking [{file_path}] "
                f"for branch [{branch}] org [{org}] and repo [{repo}]",
                extra={"org": org, "repo": repo, "branch": branch, "status": response.status_code}
            )
        return False
