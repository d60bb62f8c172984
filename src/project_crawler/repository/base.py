"""
Base interfaces for repository management providers.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..config import CrawlerOptions
from ..models import Repository


class RepositoryManagement(ABC):
    """Lists an organization's repositories and reads files from them."""
    
    @abstractmethod
    def repositories(self, org: str) -> List[Repository]:
        """
        List all tracked repositories of an organization or user.
        
        Args:
            org: Organization or user name
            
        Returns:
            Repositories in discovery order, manual projects last
        """
        pass
    
    @abstractmethod
    def file_content(self, org: str, repo: str, branch: str, file_path: str) -> str:
        """
        Read a file from a repository branch.
        
        Args:
            org: Organization or user name
            repo: Repository name
            branch: Branch to read from
            file_path: Path of the file inside the repository
            
        Returns:
            File content, or an empty string when it cannot be read
        """
        pass


class RepositoryManagementBuilder(ABC):
    """Creates a :class:`RepositoryManagement` when the options target its provider."""
    
    @abstractmethod
    def build(self, options: CrawlerOptions) -> Optional[RepositoryManagement]:
        """
        Build repository management for the given options.
        
        Args:
            options: Crawler options
            
        Returns:
            RepositoryManagement instance, or None when not applicable
        """
        pass
