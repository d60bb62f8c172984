"""Tests for turning listing pages into repository descriptors."""

import json

import pytest

from project_crawler.config import CrawlerOptions
from project_crawler.error_handling import MalformedRecordError
from project_crawler.models import Repository
from project_crawler.repository import RawPage, normalize


def _page(records, page=1):
    return RawPage(page=page, scope="orgs", status=200, body=json.dumps(records), has_next=False)


def test_maps_record_to_repository_on_master():
    options = CrawlerOptions(ignore_predicate=lambda name: False)
    result = normalize([_page([{"name": "foo", "ssh_url": "s", "clone_url": "c", "default_branch": "main"}])], options)
    assert result == [Repository(name="foo", ssh_url="s", clone_url="c", branch="master")]


def test_ignored_record_is_dropped():
    options = CrawlerOptions(ignore_predicate=lambda name: name == "foo")
    assert normalize([_page([{"name": "foo", "ssh_url": "s", "clone_url": "c"}])], options) == []


def test_ignore_check_uses_canonical_name():
    options = CrawlerOptions(rename_mapping={"raw-name": "nice-name"}, exclude="nice-.*")
    records = [
        {"name": "raw-name", "ssh_url": "s1", "clone_url": "c1"},
        {"name": "other", "ssh_url": "s2", "clone_url": "c2"},
    ]
    assert [repo.name for repo in normalize([_page(records)], options)] == ["other"]


def test_name_is_transformed():
    options = CrawlerOptions(name_transform=str.upper)
    result = normalize([_page([{"name": "foo", "ssh_url": "s", "clone_url": "c"}])], options)
    assert result[0].name == "FOO"


def test_keeps_page_then_array_order():
    pages = [
        _page([{"name": n, "ssh_url": n, "clone_url": n} for n in ("b", "a")], page=1),
        _page([{"name": n, "ssh_url": n, "clone_url": n} for n in ("d", "c")], page=2),
    ]
    assert [repo.name for repo in normalize(pages, CrawlerOptions())] == ["b", "a", "d", "c"]


def test_accepts_bare_page_bodies():
    body = json.dumps([{"name": "foo", "ssh_url": "s", "clone_url": "c"}])
    assert normalize([body], CrawlerOptions())[0].name == "foo"


@pytest.mark.parametrize("missing", ["name", "ssh_url", "clone_url"])
def test_missing_key_is_malformed(missing):
    record = {"name": "foo", "ssh_url": "s", "clone_url": "c"}
    del record[missing]
    with pytest.raises(MalformedRecordError) as excinfo:
        normalize([_page([record])], CrawlerOptions())
    assert excinfo.value.missing_keys == [missing]
    assert excinfo.value.page_index == 0


@pytest.mark.parametrize("body", ["not json", '{"message": "Bad credentials"}', "[1, 2]"])
def test_unparseable_pages_are_malformed(body):
    with pytest.raises(MalformedRecordError):
        normalize([body], CrawlerOptions())
