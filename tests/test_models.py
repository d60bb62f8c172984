"""Tests for repository descriptors and provider selection."""

import json

from project_crawler.models import Provider, Repository, parse_provider, selects


def test_repository_serialization():
    repo = Repository("api", "git@github.com:acme/api.git", "https://github.com/acme/api.git", "dev")
    assert json.loads(repo.to_json()) == repo.to_dict()
    assert Repository.from_dict(repo.to_dict()) == repo


def test_repository_branch_defaults_to_master():
    assert Repository.from_dict({"name": "a", "ssh_url": "s", "clone_url": "c"}).branch == "master"


def test_repositories_are_hashable_by_value():
    assert len({Repository("a", "s", "c"), Repository("a", "s", "c"), Repository("a", "s", "c", "dev")}) == 2


def test_parse_provider():
    assert parse_provider("github") is Provider.GITHUB
    assert parse_provider(Provider.GITLAB) is Provider.GITLAB
    assert parse_provider("Github") == "Github"
    assert parse_provider(None) is None


def test_selects():
    assert selects("github", Provider.GITHUB)
    assert selects(Provider.GITHUB, Provider.GITHUB)
    assert not selects("other", Provider.GITHUB)
    assert not selects(None, Provider.GITHUB)
