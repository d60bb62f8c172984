"""
Repository hosting provider selection.
"""

from enum import Enum
from typing import Optional, Union


class Provider(Enum):
    """Hosting providers a crawler configuration can point at."""
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"


ProviderSelector = Optional[Union[Provider, str]]


def parse_provider(value: ProviderSelector) -> ProviderSelector:
    """
    Turn a configured selector into a :class:`Provider` where it names one.
    
    Unknown strings are kept as-is so they still compare unequal to every
    known provider. Matching is case-sensitive.
    """
    if value is None or isinstance(value, Provider):
        return value
    for provider in Provider:
        if provider.value == value:
            return provider
    return value


def selects(selector: ProviderSelector, provider: Provider) -> bool:
    """Return True when ``selector`` designates ``provider``."""
    return parse_provider(selector) is provider
