"""Tests for appending manually configured projects."""

from project_crawler.config import CrawlerOptions
from project_crawler.models import ProjectAndBranch, Repository
from project_crawler.repository import merge_manual_projects


def test_manual_project_is_built_from_org():
    options = CrawlerOptions(projects=(ProjectAndBranch("x", "dev"),))
    assert merge_manual_projects("org", [], options) == [
        Repository(
            name="x",
            ssh_url="git@github.com:org/x.git",
            clone_url="https://github.com/org/x.git",
            branch="dev",
        )
    ]


def test_manual_projects_follow_listed_ones():
    listed = [Repository("api", "s", "c")]
    options = CrawlerOptions(projects=(ProjectAndBranch("x"),))
    result = merge_manual_projects("org", listed, options)
    assert [repo.name for repo in result] == ["api", "x"]
    assert listed == [Repository("api", "s", "c")]


def test_identical_manual_entries_collapse():
    options = CrawlerOptions(projects=(ProjectAndBranch("x", "dev"), ProjectAndBranch("x", "dev"),
                                       ProjectAndBranch("x", "main")))
    result = merge_manual_projects("org", [], options)
    assert [repo.branch for repo in result] == ["dev", "main"]


def test_renamed_entries_with_same_tuple_collapse():
    options = CrawlerOptions(projects=(ProjectAndBranch("x"),), rename_mapping={"x": "y"})
    result = merge_manual_projects("org", [], options)
    assert result[0].name == "y"
    assert result[0].clone_url == "https://github.com/org/x.git"


def test_manual_entries_skip_ignore_filter_and_listed_dedup():
    listed = [Repository("x", "git@github.com:org/x.git", "https://github.com/org/x.git", "master")]
    options = CrawlerOptions(projects=(ProjectAndBranch("x"),), exclude=".*")
    result = merge_manual_projects("org", listed, options)
    assert result == listed + listed
