"""
Turns raw listing pages into canonical repository descriptors.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Union

from ..config import CrawlerOptions
from ..error_handling import MalformedRecordError
from ..models import Repository
from .pagination import RawPage

logger = logging.getLogger(__name__)

LISTED_BRANCH = "master"
REQUIRED_KEYS = ("name", "ssh_url", "clone_url")


@dataclass(frozen=True)
class RepositoryRecord:
    """The part of a GitHub repository listing entry the crawler reads."""
    name: str
    ssh_url: str
    clone_url: str
    
    @classmethod
    def from_json(cls, data: Any, page_index: int) -> 'RepositoryRecord':
        """
        Validate one listing entry.
        
        Raises:
            MalformedRecordError: If the entry is not an object or lacks a required key
        """
        if not isinstance(data, dict):
            raise MalformedRecordError(
                f"Expected a repository object, got {type(data).__name__}",
                page_index=page_index
            )
        missing = [key for key in REQUIRED_KEYS if data.get(key) is None]
        if missing:
            raise MalformedRecordError(
                f"Repository record is missing {', '.join(missing)}",
                missing_keys=missing,
                page_index=page_index
            )
        return cls(name=str(data["name"]), ssh_url=str(data["ssh_url"]), clone_url=str(data["clone_url"]))


def parse_page(body: str, page_index: int) -> List[RepositoryRecord]:
    """
    Parse one page body into records.
    
    Raises:
        MalformedRecordError: If the body is not a JSON array of valid records
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedRecordError("Listing page is not valid JSON", page_index=page_index, cause=e)
    if not isinstance(data, list):
        raise MalformedRecordError(
            f"Listing page is a JSON {type(data).__name__}, not an array",
            page_index=page_index
        )
    return [RepositoryRecord.from_json(entry, page_index) for entry in data]


def normalize(pages: Iterable[Union[RawPage, str]], options: CrawlerOptions) -> List[Repository]:
    """
    Map listing pages to repositories, dropping ignored ones.
    
    Names go through ``options.project_name`` before the ignore check and
    every listed repository uses the ``master`` branch. Page order and
    in-page order are kept.
    
    Args:
        pages: Raw pages or bare page bodies
        options: Crawler options providing the rename and ignore hooks
        
    Returns:
        Repositories that are not ignored
    """
    repositories = []
    for index, page in enumerate(pages):
        body = page.body if isinstance(page, RawPage) else page
        for record in parse_page(body, index):
            repository = Repository(
                name=options.project_name(record.name),
                ssh_url=record.ssh_url,
                clone_url=record.clone_url,
                branch=LISTED_BRANCH
            )
            if options.is_ignored(repository.name):
                logger.debug(f"Project [{repository.name}] is ignored")
                continue
            repositories.append(repository)
    return repositories
