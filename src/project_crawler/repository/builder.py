"""
Builder that decides whether options target GitHub.
"""

import logging
from typing import Optional

from ..config import CrawlerOptions
from ..models import Provider, selects
from .base import RepositoryManagement, RepositoryManagementBuilder
from .github_management import GithubRepositoryManagement

logger = logging.getLogger(__name__)


class GithubRepositoryManagementBuilder(RepositoryManagementBuilder):
    """
    Builds :class:`GithubRepositoryManagement` for GitHub configurations.
    
    Options target GitHub when the root URL mentions ``github`` or when
    the provider selector is GitHub. Anything else yields ``None``.
    """
    
    def build(self, options: CrawlerOptions) -> Optional[RepositoryManagement]:
        if self.is_applicable(options.root_url) or selects(options.repository, Provider.GITHUB):
            return self.create_new_repo_management(options)
        return None
    
    def create_new_repo_management(self, options: CrawlerOptions) -> RepositoryManagement:
        return GithubRepositoryManagement(options)
    
    @staticmethod
    def is_applicable(url: Optional[str]) -> bool:
        applicable = bool(url and url.strip()) and "github" in url.lower()
        logger.debug(f"URL [{url}] is applicable [{applicable}]")
        return applicable
