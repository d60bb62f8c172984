"""Tests for choosing GitHub repository management from crawler options."""

import pytest

from project_crawler.config import CrawlerOptions
from project_crawler.models import Provider
from project_crawler.repository import (
    GithubRepositoryManagement,
    GithubRepositoryManagementBuilder,
    RepositoryManagement,
)


class StubManagement(RepositoryManagement):
    def repositories(self, org):
        return []

    def file_content(self, org, repo, branch, file_path):
        return ""


class StubBuilder(GithubRepositoryManagementBuilder):
    def create_new_repo_management(self, options):
        return StubManagement()


def test_returns_none_when_url_is_empty():
    assert GithubRepositoryManagementBuilder().build(CrawlerOptions()) is None


def test_returns_none_when_url_is_blank():
    assert GithubRepositoryManagementBuilder().build(CrawlerOptions(root_url="   ")) is None


def test_returns_none_when_url_does_not_contain_github():
    assert GithubRepositoryManagementBuilder().build(CrawlerOptions(root_url="foo")) is None


def test_returns_management_when_repository_is_github_enum():
    options = CrawlerOptions(root_url="foo", repository=Provider.GITHUB)
    assert StubBuilder().build(options) is not None


def test_returns_management_when_repository_is_github_string():
    options = CrawlerOptions(root_url="foo", repository="github")
    assert StubBuilder().build(options) is not None


@pytest.mark.parametrize("selector", ["GitHub", "GITHUB", "gitlab", Provider.BITBUCKET])
def test_other_provider_selectors_are_not_github(selector):
    options = CrawlerOptions(root_url="foo", repository=selector)
    assert StubBuilder().build(options) is None


@pytest.mark.parametrize("url", ["http://github", "https://GitHub.example.com", "git@github.com:org"])
def test_returns_management_when_url_contains_github(url):
    assert StubBuilder().build(CrawlerOptions(root_url=url)) is not None


def test_default_factory_builds_github_management():
    management = GithubRepositoryManagementBuilder().build(CrawlerOptions(root_url="https://github.com"))
    assert isinstance(management, GithubRepositoryManagement)
    management.client.close()
