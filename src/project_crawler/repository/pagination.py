"""
Paginated repository listing with organization to user fallback.
"""

import logging
from dataclasses import dataclass
from typing import List

import requests

from ..error_handling import UnexpectedStatusError
from .github_client import GitHubClient

logger = logging.getLogger(__name__)

NEXT_RELATION = 'rel="next"'


@dataclass(frozen=True)
class RawPage:
    """One listing response body and its pagination state."""
    page: int
    scope: str
    status: int
    body: str
    has_next: bool


def has_next_link(response: requests.Response) -> bool:
    """Return True when the ``Link`` header advertises a next page."""
    link = response.headers.get("Link")
    if not link:
        return False
    return NEXT_RELATION in link


def fetch_page(client: GitHubClient, org: str, page: int) -> RawPage:
    """
    Fetch a single listing page for ``org``.
    
    The organization endpoint is tried first. A 404 means ``org`` may be a
    user, so the same page is requested from the user endpoint; any error
    status there is fatal. The decision is made per page.
    
    Raises:
        UnexpectedStatusError: If the user fallback also fails
        TransportError: If GitHub cannot be reached
    """
    scope = "orgs"
    response = client.list_org_repos(org, page)
    if response.status_code == 404:
        logger.warning(
            "Got 404, will assume that org is actually a user",
            extra={"org": org, "page": page, "status": response.status_code}
        )
        scope = "users"
        response = client.list_user_repos(org, page)
        if response.status_code >= 400:
            raise UnexpectedStatusError(
                f"Status [{response.status_code}] was returned for orgs and users",
                status_code=response.status_code,
                org=org,
                page=page
            )
    
    return RawPage(
        page=page,
        scope=scope,
        status=response.status_code,
        body=response.text,
        has_next=has_next_link(response)
    )


def list_raw_pages(client: GitHubClient, org: str) -> List[RawPage]:
    """
    Fetch every listing page for ``org``.
    
    Pages are requested in order starting at 1 until a response no
    longer advertises a next page. Nothing is returned if any page fails.
    
    Args:
        client: GitHub transport
        org: Organization or user name
        
    Returns:
        Raw pages in fetch order
    """
    pages: List[RawPage] = []
    page_number = 1
    while True:
        logger.info(f"Grabbing page [{page_number}]", extra={"org": org, "page": page_number})
        page = fetch_page(client, org, page_number)
        pages.append(page)
        if not page.has_next:
            break
        page_number += 1
    
    logger.debug(f"Fetched {len(pages)} page(s) for {org}", extra={"org": org})
    return pages
