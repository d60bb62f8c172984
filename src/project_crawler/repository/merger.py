"""
Adds manually configured projects to a listing.
"""

import logging
from typing import List

from ..config import CrawlerOptions
from ..models import ProjectAndBranch, Repository

logger = logging.getLogger(__name__)


def ssh_url(org: str, project: ProjectAndBranch) -> str:
    return f"git@github.com:{org}/{project.project}.git"


def clone_url(org: str, project: ProjectAndBranch) -> str:
    return f"https://github.com/{org}/{project.project}.git"


def merge_manual_projects(org: str, listed: List[Repository], options: CrawlerOptions) -> List[Repository]:
    """
    Append the configured projects of ``org`` after the listed repositories.
    
    Manual entries are deduplicated among themselves by value (first
    occurrence wins). They are neither ignore-filtered nor checked against
    the listed repositories, so an entry may repeat a listed one.
    
    Args:
        org: Organization or user the projects belong to
        listed: Repositories found through the API
        options: Crawler options holding the manual projects
        
    Returns:
        A new list with listed repositories first, manual ones last
    """
    manual = [
        Repository(
            name=options.project_name(project.project),
            ssh_url=ssh_url(org, project),
            clone_url=clone_url(org, project),
            branch=project.branch
        )
        for project in options.projects
    ]
    unique_manual = list(dict.fromkeys(manual))
    if unique_manual:
        logger.info(f"Adding {len(unique_manual)} manually set project(s) for {org}", extra={"org": org})
    return list(listed) + unique_manual
