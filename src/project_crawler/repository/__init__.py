"""
Repository discovery and file access for GitHub.
"""

from .base import RepositoryManagement, RepositoryManagementBuilder
from .credentials import AuthMode, Credentials, select_credentials
from .github_client import GitHubClient
from .pagination import RawPage, has_next_link, fetch_page, list_raw_pages
from .normalizer import RepositoryRecord, normalize, parse_page
from .merger import merge_manual_projects
from .github_management import GithubRepositoryManagement
from .builder import GithubRepositoryManagementBuilder

__all__ = [
    "RepositoryManagement",
    "RepositoryManagementBuilder",
    "AuthMode",
    "Credentials",
    "select_credentials",
    "GitHubClient",
    "RawPage",
    "has_next_link",
    "fetch_page",
    "list_raw_pages",
    "RepositoryRecord",
    "normalize",
    "parse_page",
    "merge_manual_projects",
    "GithubRepositoryManagement",
    "GithubRepositoryManagementBuilder"
]
