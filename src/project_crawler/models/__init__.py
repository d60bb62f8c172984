"""
Data models for the project crawler.
"""

from .repository import Repository, ProjectAndBranch, DEFAULT_BRANCH
from .provider import Provider, ProviderSelector, parse_provider, selects

__all__ = [
    "Repository",
    "ProjectAndBranch",
    "DEFAULT_BRANCH",
    "Provider",
    "ProviderSelector",
    "parse_provider",
    "selects"
]
