"""Tests for paginated repository listing and the org to user fallback."""

from unittest.mock import MagicMock, call

import pytest

from project_crawler.error_handling import TransportError, UnexpectedStatusError
from project_crawler.repository import fetch_page, has_next_link, list_raw_pages

NEXT = '<https://api.github.com/orgs/acme/repos?page=2>; rel="next", <https://api.github.com/orgs/acme/repos?page=2>; rel="last"'
LAST = '<https://api.github.com/orgs/acme/repos?page=1>; rel="prev", <https://api.github.com/orgs/acme/repos?page=1>; rel="first"'


def test_has_next_link(make_resp):
    assert has_next_link(make_resp(headers={"Link": NEXT})) is True
    assert has_next_link(make_resp(headers={"link": NEXT})) is True
    assert has_next_link(make_resp(headers={"Link": LAST})) is False
    assert has_next_link(make_resp(headers={})) is False


def test_fetches_pages_until_no_next_link(make_resp):
    client = MagicMock()
    client.list_org_repos.side_effect = [
        make_resp(200, '[{"name": "a"}]', {"Link": NEXT}),
        make_resp(200, '[{"name": "b"}]', {"Link": LAST}),
    ]

    pages = list_raw_pages(client, "acme")

    assert [page.body for page in pages] == ['[{"name": "a"}]', '[{"name": "b"}]']
    assert [page.page for page in pages] == [1, 2]
    assert client.list_org_repos.call_args_list == [call("acme", 1), call("acme", 2)]
    client.list_user_repos.assert_not_called()


def test_single_page_without_link_header(make_resp):
    client = MagicMock()
    client.list_org_repos.return_value = make_resp(200, "[]")

    pages = list_raw_pages(client, "acme")

    assert len(pages) == 1
    assert pages[0].scope == "orgs"
    assert pages[0].has_next is False


def test_falls_back_to_user_listing_for_same_page(make_resp):
    client = MagicMock()
    client.list_org_repos.return_value = make_resp(404, '{"message": "Not Found"}')
    client.list_user_repos.return_value = make_resp(200, '[{"name": "dotfiles"}]')

    page = fetch_page(client, "octocat", 1)

    client.list_user_repos.assert_called_once_with("octocat", 1)
    assert page.scope == "users"
    assert page.body == '[{"name": "dotfiles"}]'


def test_fails_when_user_listing_also_fails(make_resp):
    client = MagicMock()
    client.list_org_repos.return_value = make_resp(404)
    client.list_user_repos.return_value = make_resp(403)

    with pytest.raises(UnexpectedStatusError) as excinfo:
        list_raw_pages(client, "ghost")

    assert excinfo.value.status_code == 403
    assert excinfo.value.context["org"] == "ghost"
    assert excinfo.value.context["page"] == 1


def test_fallback_is_decided_per_page(make_resp):
    client = MagicMock()
    client.list_org_repos.side_effect = [
        make_resp(404),
        make_resp(200, '[{"name": "second"}]', {"Link": LAST}),
    ]
    client.list_user_repos.return_value = make_resp(200, '[{"name": "first"}]', {"Link": NEXT})

    pages = list_raw_pages(client, "octocat")

    assert [page.scope for page in pages] == ["users", "orgs"]
    assert client.list_org_repos.call_count == 2
    assert client.list_user_repos.call_count == 1


def test_failure_on_later_page_returns_nothing(make_resp):
    client = MagicMock()
    client.list_org_repos.side_effect = [make_resp(200, "[]", {"Link": NEXT}), make_resp(404)]
    client.list_user_repos.return_value = make_resp(500)

    with pytest.raises(UnexpectedStatusError) as excinfo:
        list_raw_pages(client, "acme")
    assert excinfo.value.page == 2


def test_transport_errors_propagate():
    client = MagicMock()
    client.list_org_repos.side_effect = TransportError("down", url="https://api.github.com/orgs/acme/repos")

    with pytest.raises(TransportError):
        list_raw_pages(client, "acme")
