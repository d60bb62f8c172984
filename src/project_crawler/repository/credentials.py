"""
Authentication mode selection for the GitHub client.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import requests

from ..config import CrawlerOptions

logger = logging.getLogger(__name__)


class AuthMode(Enum):
    """How requests to GitHub are authenticated."""
    TOKEN = "token"
    BASIC = "basic"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Credentials:
    """The selected authentication mode and the secrets it needs."""
    mode: AuthMode
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    
    def apply(self, session: requests.Session) -> None:
        """Configure ``session`` to authenticate with these credentials."""
        if self.mode is AuthMode.TOKEN:
            session.headers["Authorization"] = f"token {self.token}"
        elif self.mode is AuthMode.BASIC:
            session.auth = (self.username, self.password or "")
    
    def __repr__(self) -> str:
        return f"Credentials(mode={self.mode.value})"


def _is_not_blank(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def select_credentials(options: CrawlerOptions) -> Credentials:
    """
    Pick exactly one authentication mode.
    
    A non-blank token wins, then a non-blank username (with whatever
    password is configured), otherwise requests are anonymous.
    """
    if _is_not_blank(options.token):
        logger.info("Token passed to github client")
        return Credentials(AuthMode.TOKEN, token=options.token)
    if _is_not_blank(options.username):
        logger.info("Username and password passed to github client")
        return Credentials(AuthMode.BASIC, username=options.username, password=options.password)
    logger.info("No security passed to github client")
    return Credentials(AuthMode.ANONYMOUS)
