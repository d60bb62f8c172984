"""
Immutable crawler options snapshot.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from ..models import ProjectAndBranch, ProviderSelector


@dataclass(frozen=True)
class CrawlerOptions:
    """
    Everything a listing or file fetch needs, frozen for the duration of a call.
    
    ``project_name`` maps a raw repository name to its canonical name and
    ``is_ignored`` decides whether a canonical name is filtered out. Both
    default to the rename mapping and the ``exclude`` regex; callers may
    supply their own callables instead.
    """
    
    root_url: str = ""
    token: str = ""
    username: str = ""
    password: str = ""
    repository: ProviderSelector = None
    projects: Tuple[ProjectAndBranch, ...] = ()
    exclude: str = ""
    rename_mapping: Mapping[str, str] = field(default_factory=dict, hash=False)
    api_base_url: str = "https://api.github.com"
    timeout: int = 30
    max_retries: int = 3
    name_transform: Optional[Callable[[str], str]] = None
    ignore_predicate: Optional[Callable[[str], bool]] = None
    
    def __post_init__(self):
        # Freeze the mutable inputs so a snapshot cannot change under a running call.
        object.__setattr__(self, "projects", tuple(self.projects))
        object.__setattr__(self, "rename_mapping", MappingProxyType(dict(self.rename_mapping)))
        pattern = re.compile(self.exclude) if self.exclude else None
        object.__setattr__(self, "_exclude_pattern", pattern)
    
    def project_name(self, name: str) -> str:
        """Return the canonical name for a raw repository name."""
        if self.name_transform is not None:
            return self.name_transform(name)
        return self.rename_mapping.get(name, name)
    
    def is_ignored(self, name: str) -> bool:
        """Return True when the canonical ``name`` must be filtered out."""
        if self.ignore_predicate is not None:
            return self.ignore_predicate(name)
        pattern = getattr(self, "_exclude_pattern")
        return bool(pattern is not None and pattern.fullmatch(name))
