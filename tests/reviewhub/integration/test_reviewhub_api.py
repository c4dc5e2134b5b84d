"""Integration tests for the ReviewHub API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from reviewhub.api import ROUTERS, register_error_handlers

CONTENT = "Spotless rooms, a generous breakfast and staff who booked our taxi without asking."


@pytest.fixture()
def app():
    app = FastAPI()
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


def _as(user_id):
    return {"X-User-Id": user_id}


def _sign_in(client, user_id, **profile):
    response = client.put("/api/auth/user", json=profile, headers=_as(user_id))
    assert response.status_code == 200
    return user_id


def _seed(client):
    client.post("/api/init")
    return {c["slug"]: c for c in client.get("/api/categories").json()}


def _create_review(client, user_id="alice", **overrides):
    body = {"title": "Charming seaside hotel", "content": CONTENT, "rating": 5}
    body.update(overrides)
    response = client.post("/api/reviews", json=body, headers=_as(user_id))
    assert response.status_code == 201, response.text
    return response.json()


class TestCategoriesAPI:
    def test_init_is_idempotent(self, client):
        first = client.post("/api/init")
        second = client.post("/api/init")
        assert first.status_code == 200
        assert len(first.json()["created"]) == 6
        assert second.json()["created"] == []

    def test_list_ordered_by_name(self, client):
        _seed(client)
        names = [c["name"] for c in client.get("/api/categories").json()]
        assert names == sorted(names)

    def test_get_by_slug(self, client):
        _seed(client)
        response = client.get("/api/categories/travel")
        assert response.status_code == 200
        assert response.json()["icon"] == "plane"

    def test_unknown_slug_returns_404(self, client):
        assert client.get("/api/categories/nope").status_code == 404


class TestAuthAPI:
    def test_missing_header_returns_401(self, client):
        assert client.get("/api/auth/user").status_code == 401

    def test_unsynced_user_returns_401(self, client):
        assert client.get("/api/auth/user", headers=_as("stranger")).status_code == 401

    def test_sync_then_fetch(self, client):
        _sign_in(client, "alice", email="alice@example.com", first_name="Alice")
        response = client.get("/api/auth/user", headers=_as("alice"))
        assert response.status_code == 200
        assert response.json()["email"] == "alice@example.com"
        assert response.json()["id"] == "alice"

    def test_email_conflict_returns_400(self, client):
        _sign_in(client, "alice", email="shared@example.com")
        response = client.put("/api/auth/user", json={"email": "shared@example.com"}, headers=_as("bob"))
        assert response.status_code == 400


class TestReviewsAPI:
    def test_create_review(self, client):
        _sign_in(client, "alice")
        categories = _seed(client)
        data = _create_review(client, category_id=categories["travel"]["id"], images=["/uploads/a.jpg"])
        assert data["author"]["id"] == "alice"
        assert data["category"]["slug"] == "travel"
        assert data["images"] == ["/uploads/a.jpg"]
        assert client.get("/api/categories/travel").json()["review_count"] == 1

    def test_create_requires_auth(self, client):
        response = client.post("/api/reviews", json={"title": "Nope nope", "content": CONTENT, "rating": 3})
        assert response.status_code == 401

    def test_short_content_returns_400(self, client):
        _sign_in(client, "alice")
        response = client.post(
            "/api/reviews", json={"title": "Too short", "content": "x" * 49, "rating": 3}, headers=_as("alice")
        )
        assert response.status_code == 400

    def test_malformed_body_returns_400(self, client):
        _sign_in(client, "alice")
        response = client.post("/api/reviews", json={"title": "Missing fields"}, headers=_as("alice"))
        assert response.status_code == 400

    def test_listing_hides_drafts_by_default(self, client):
        _sign_in(client, "alice")
        _create_review(client, title="Published stay")
        _create_review(client, title="Draft stay", is_draft=True)

        listed = client.get("/api/reviews").json()
        assert [r["title"] for r in listed] == ["Published stay"]

        drafts = client.get("/api/reviews", params={"isDraft": "true", "authorId": "alice"}).json()
        assert [r["title"] for r in drafts] == ["Draft stay"]

    def test_listing_query_parameters(self, client):
        _sign_in(client, "alice")
        _create_review(client, title="Lovely stay", rating=5)
        _create_review(client, title="Average stay", rating=3)
        response = client.get("/api/reviews", params={"minRating": 4, "sortBy": "rating", "limit": 5})
        assert [r["title"] for r in response.json()] == ["Lovely stay"]

    def test_listing_rejects_bad_sort(self, client):
        assert client.get("/api/reviews", params={"sortBy": "random"}).status_code == 400

    def test_listing_rejects_bad_min_rating(self, client):
        assert client.get("/api/reviews", params={"minRating": 9}).status_code == 400

    def test_get_review_counts_views(self, client):
        _sign_in(client, "alice")
        review_id = _create_review(client)["id"]

        client.get(f"/api/reviews/{review_id}", headers=_as("bob"))
        client.get(f"/api/reviews/{review_id}", headers=_as("alice"))
        client.get(f"/api/reviews/{review_id}")

        response = client.get(f"/api/reviews/{review_id}")
        assert response.json()["views"] == 2

    def test_get_unknown_review_returns_404(self, client):
        assert client.get("/api/reviews/missing").status_code == 404

    def test_update_by_author(self, client):
        _sign_in(client, "alice")
        review_id = _create_review(client)["id"]
        response = client.put(f"/api/reviews/{review_id}", json={"rating": 2}, headers=_as("alice"))
        assert response.status_code == 200
        assert response.json()["rating"] == 2
        assert response.json()["title"] == "Charming seaside hotel"

    def test_update_by_other_user_returns_403(self, client):
        _sign_in(client, "alice")
        _sign_in(client, "mallory")
        review_id = _create_review(client)["id"]
        response = client.put(f"/api/reviews/{review_id}", json={"rating": 1}, headers=_as("mallory"))
        assert response.status_code == 403

    def test_delete_by_author(self, client):
        _sign_in(client, "alice")
        categories = _seed(client)
        review_id = _create_review(client, category_id=categories["travel"]["id"])["id"]

        response = client.delete(f"/api/reviews/{review_id}", headers=_as("alice"))

        assert response.status_code == 200
        assert client.get(f"/api/reviews/{review_id}").status_code == 404
        assert client.get("/api/categories/travel").json()["review_count"] == 0

    def test_delete_by_other_user_returns_403(self, client):
        _sign_in(client, "alice")
        _sign_in(client, "mallory")
        review_id = _create_review(client)["id"]
        assert client.delete(f"/api/reviews/{review_id}", headers=_as("mallory")).status_code == 403


class TestVotesAPI:
    def test_vote_and_flip(self, client):
        _sign_in(client, "alice")
        _sign_in(client, "bob")
        review_id = _create_review(client)["id"]

        first = client.post(f"/api/reviews/{review_id}/vote", json={"is_helpful": True}, headers=_as("bob"))
        assert first.status_code == 200
        assert first.json()["stats"] == {"helpful_votes": 1, "total_votes": 1}

        second = client.post(f"/api/reviews/{review_id}/vote", json={"is_helpful": False}, headers=_as("bob"))
        assert second.json()["stats"] == {"helpful_votes": 0, "total_votes": 1}
        assert second.json()["vote"]["user_id"] == "bob"

    def test_non_boolean_vote_returns_400(self, client):
        _sign_in(client, "alice")
        review_id = _create_review(client)["id"]
        response = client.post(f"/api/reviews/{review_id}/vote", json={"is_helpful": "yes"}, headers=_as("alice"))
        assert response.status_code == 400

    def test_vote_on_unknown_review_returns_404(self, client):
        _sign_in(client, "bob")
        response = client.post("/api/reviews/missing/vote", json={"is_helpful": True}, headers=_as("bob"))
        assert response.status_code == 404

    def test_own_vote_lookup(self, client):
        _sign_in(client, "alice")
        _sign_in(client, "bob")
        review_id = _create_review(client)["id"]

        assert client.get(f"/api/reviews/{review_id}/vote", headers=_as("bob")).json() is None

        client.post(f"/api/reviews/{review_id}/vote", json={"is_helpful": True}, headers=_as("bob"))
        response = client.get(f"/api/reviews/{review_id}/vote", headers=_as("bob"))
        assert response.json()["is_helpful"] is True


class TestUserStatsAPI:
    def test_stats(self, client):
        _sign_in(client, "alice")
        _create_review(client, rating=4)
        _create_review(client, rating=5)
        _create_review(client, rating=1, is_draft=True)
        response = client.get("/api/users/alice/stats")
        assert response.json() == {"total_reviews": 2, "avg_rating": 4.5, "total_helpful_votes": 0}

    def test_stats_for_unknown_user(self, client):
        response = client.get("/api/users/nobody/stats")
        assert response.status_code == 200
        assert response.json()["total_reviews"] == 0


class TestUploadAPI:
    def test_upload_image(self, client, blob_store):
        _sign_in(client, "alice")
        response = client.post(
            "/api/upload",
            files={"file": ("photo.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")},
            headers=_as("alice"),
        )
        assert response.status_code == 200
        url = response.json()["url"]
        assert url.startswith("/uploads/") and url.endswith(".jpg")
        assert blob_store.get(url.rsplit("/", 1)[1]) == b"\xff\xd8\xff fake jpeg"

    def test_non_image_returns_400(self, client):
        _sign_in(client, "alice")
        response = client.post(
            "/api/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=_as("alice"),
        )
        assert response.status_code == 400

    def test_upload_requires_auth(self, client):
        response = client.post("/api/upload", files={"file": ("photo.jpg", b"data", "image/jpeg")})
        assert response.status_code == 401


class TestUnexpectedErrors:
    def test_unhandled_exception_returns_500_without_detail(self, app):
        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        response = TestClient(app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        assert "secret" not in response.text
