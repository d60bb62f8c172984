"""
Repository descriptors produced by the crawler.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any
import json

DEFAULT_BRANCH = "master"


@dataclass(frozen=True)
class Repository:
    """
    A repository discovered for an organization or user.
    
    Instances are immutable and compare (and hash) by all four fields,
    which is what the manual project merge relies on for deduplication.
    ``name`` is always the canonical, post-rename project name.
    """
    
    name: str
    ssh_url: str
    clone_url: str
    branch: str = DEFAULT_BRANCH
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert repository to dictionary for serialization.
        
        Returns:
            Dictionary representation of the repository
        """
        return asdict(self)
    
    def to_json(self) -> str:
        """Convert repository to JSON string."""
        return json.dumps(self.to_dict(), indent=2)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Repository':
        """
        Create repository from dictionary.
        
        Args:
            data: Dictionary containing repository data
            
        Returns:
            Repository instance
        """
        return cls(
            name=data["name"],
            ssh_url=data["ssh_url"],
            clone_url=data["clone_url"],
            branch=data.get("branch", DEFAULT_BRANCH)
        )


@dataclass(frozen=True)
class ProjectAndBranch:
    """A manually tracked project and the branch to build from."""
    
    project: str
    branch: str = DEFAULT_BRANCH
    
    @classmethod
    def parse(cls, value: str) -> 'ProjectAndBranch':
        """
        Parse a ``project`` or ``project:branch`` entry.
        
        Args:
            value: Raw configuration entry
            
        Returns:
            ProjectAndBranch instance
            
        Raises:
            ValueError: If the project part is blank
        """
        project, _, branch = value.strip().partition(":")
        project = project.strip()
        if not project:
            raise ValueError(f"Project entry has no project name: {value!r}")
        return cls(project=project, branch=branch.strip() or DEFAULT_BRANCH)
