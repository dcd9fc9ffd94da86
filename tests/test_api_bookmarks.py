"""
tests/test_api_bookmarks.py -- Integration tests for owner-scoped bookmark routes.

Coverage:
  - Owner lifecycle: empty list, create 201, list 1, get by id, edit, delete 204, empty list
  - Scenario C: another authenticated account gets 403 on read/edit/delete,
    and the bookmark is untouched afterwards
  - Listing never shows other accounts' bookmarks
  - Nonexistent id -> 404 (not 403); unauthenticated -> 401 on every route
  - owner_id in the request body is ignored
"""

from __future__ import annotations

import pytest
from conftest import bearer, signup_token
from fastapi.testclient import TestClient

BOOKMARKS = "/api/v1/bookmarks"


@pytest.fixture(scope="module")
def owner_token(api_client: TestClient) -> str:
    return signup_token(api_client, "owner@x.com")


@pytest.fixture(scope="module")
def intruder_token(api_client: TestClient) -> str:
    return signup_token(api_client, "intruder@x.com")


def _create(client: TestClient, token: str, **overrides) -> dict:
    body = {"title": "Test Bookmark", "link": "https://google.com", **overrides}
    resp = client.post(BOOKMARKS, json=body, headers=bearer(token))
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestOwnerLifecycle:
    """Runs in order against one account that owns nothing else."""

    @pytest.fixture(scope="class")
    def token(self, api_client: TestClient) -> str:
        return signup_token(api_client, "lifecycle@x.com")

    def test_full_lifecycle(self, api_client: TestClient, token: str) -> None:
        headers = bearer(token)

        resp = api_client.get(BOOKMARKS, headers=headers)
        assert resp.status_code == 200
        assert resp.json() == []

        created = _create(api_client, token)
        bookmark_id = created["id"]
        assert created["title"] == "Test Bookmark"
        assert created["description"] is None

        listing = api_client.get(BOOKMARKS, headers=headers).json()
        assert [b["id"] for b in listing] == [bookmark_id]

        resp = api_client.get(f"{BOOKMARKS}/{bookmark_id}", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["id"] == bookmark_id

        resp = api_client.patch(
            f"{BOOKMARKS}/{bookmark_id}",
            headers=headers,
            json={"description": "Updated description", "title": "Updated title"},
        )
        assert resp.status_code == 200, resp.text
        assert resp.json()["title"] == "Updated title"
        assert resp.json()["description"] == "Updated description"
        assert resp.json()["link"] == "https://google.com"

        resp = api_client.delete(f"{BOOKMARKS}/{bookmark_id}", headers=headers)
        assert resp.status_code == 204
        assert resp.content == b""

        assert api_client.get(BOOKMARKS, headers=headers).json() == []
        assert api_client.get(f"{BOOKMARKS}/{bookmark_id}", headers=headers).status_code == 404


class TestCrossOwnerAccess:
    def test_intruder_forbidden_on_every_operation(
        self, api_client: TestClient, owner_token: str, intruder_token: str
    ) -> None:
        bookmark = _create(api_client, owner_token, title="Private")
        url = f"{BOOKMARKS}/{bookmark['id']}"
        intruder = bearer(intruder_token)

        read = api_client.get(url, headers=intruder)
        edit = api_client.patch(url, headers=intruder, json={"title": "Hijacked"})
        delete = api_client.delete(url, headers=intruder)
        for resp in (read, edit, delete):
            assert resp.status_code == 403, resp.text
            assert resp.json()["error"]["code"] == "forbidden"

        owner = bearer(owner_token)
        resp = api_client.get(url, headers=owner)
        assert resp.status_code == 200
        assert resp.json()["title"] == "Private"

        assert api_client.patch(url, headers=owner, json={"title": "Still mine"}).status_code == 200
        assert api_client.delete(url, headers=owner).status_code == 204

    def test_listing_is_scoped(self, api_client: TestClient, owner_token: str, intruder_token: str) -> None:
        mine = _create(api_client, owner_token, title="Mine")
        theirs = _create(api_client, intruder_token, title="Theirs")
        owner_ids = {b["id"] for b in api_client.get(BOOKMARKS, headers=bearer(owner_token)).json()}
        intruder_ids = {b["id"] for b in api_client.get(BOOKMARKS, headers=bearer(intruder_token)).json()}
        assert mine["id"] in owner_ids and theirs["id"] not in owner_ids
        assert theirs["id"] in intruder_ids and mine["id"] not in intruder_ids

    def test_owner_id_in_body_is_ignored(
        self, api_client: TestClient, owner_token: str, intruder_token: str
    ) -> None:
        me = api_client.get("/api/v1/users/me", headers=bearer(intruder_token)).json()
        created = _create(api_client, owner_token, owner_id=me["id"])
        assert created["owner_id"] != me["id"]
        assert api_client.get(f"{BOOKMARKS}/{created['id']}", headers=bearer(intruder_token)).status_code == 403


class TestNotFoundAndValidation:
    def test_missing_bookmark_is_404(self, api_client: TestClient, owner_token: str) -> None:
        headers = bearer(owner_token)
        for resp in (
            api_client.get(f"{BOOKMARKS}/999999", headers=headers),
            api_client.patch(f"{BOOKMARKS}/999999", headers=headers, json={"title": "x"}),
            api_client.delete(f"{BOOKMARKS}/999999", headers=headers),
        ):
            assert resp.status_code == 404
            assert resp.json()["error"]["code"] == "not_found"

    @pytest.mark.parametrize("body", [{}, {"title": "No link"}, {"link": "https://x.com"}, {"title": "", "link": "x"}])
    def test_create_requires_title_and_link(self, api_client: TestClient, owner_token: str, body: dict) -> None:
        resp = api_client.post(BOOKMARKS, json=body, headers=bearer(owner_token))
        assert resp.status_code == 400

    def test_patch_cannot_null_title(self, api_client: TestClient, owner_token: str) -> None:
        bookmark = _create(api_client, owner_token)
        resp = api_client.patch(f"{BOOKMARKS}/{bookmark['id']}", headers=bearer(owner_token), json={"title": None})
        assert resp.status_code == 400

    def test_non_integer_id_is_400(self, api_client: TestClient, owner_token: str) -> None:
        assert api_client.get(f"{BOOKMARKS}/abc", headers=bearer(owner_token)).status_code == 400


class TestUnauthenticated:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", BOOKMARKS),
            ("post", BOOKMARKS),
            ("get", f"{BOOKMARKS}/1"),
            ("patch", f"{BOOKMARKS}/1"),
            ("delete", f"{BOOKMARKS}/1"),
        ],
    )
    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer garbage"}])
    def test_401(self, api_client: TestClient, method: str, path: str, headers: dict) -> None:
        kwargs = {"headers": headers}
        if method in ("post", "patch"):
            kwargs["json"] = {"title": "t", "link": "https://x.com"}
        resp = getattr(api_client, method)(path, **kwargs)
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "unauthorized"
