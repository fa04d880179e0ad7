"""Tests for /blog-posts: public reads, admin-only writes."""

import pytest


@pytest.fixture
def post_payload() -> dict:
    return {
        "title": "What Is My Post Office Worth?",
        "slug": "post-office-worth",
        "excerpt": "How cap rates drive value.",
        "category": "Valuation",
        "date": "January 5, 2025",
        "content": {
            "intro": "Start here.",
            "sections": [{"heading": "Cap rates", "content": "Lower means pricier."}],
            "conclusion": "Get a valuation.",
        },
    }


@pytest.fixture
def created(admin_client, post_payload) -> dict:
    return admin_client.post("/blog-posts", json=post_payload).json()["data"]


class TestPublicReads:

    def test_list_empty(self, client):
        response = client.get("/blog-posts")

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_list_and_lookup(self, client, created):
        assert [p["id"] for p in client.get("/blog-posts").json()["data"]] == [created["id"]]
        assert client.get("/blog-posts", params={"id": created["id"]}).json()["data"] == created
        assert client.get("/blog-posts", params={"slug": "post-office-worth"}).json()["data"] == created

    def test_unknown_slug(self, client):
        response = client.get("/blog-posts", params={"slug": "nope"})

        assert response.status_code == 404


class TestWrites:

    def test_create_defaults(self, admin_client, post_payload):
        del post_payload["date"]

        data = admin_client.post("/blog-posts", json=post_payload).json()["data"]

        assert data["read_time"] == "5 min read"
        assert data["date"]
        assert data["featured"] is False

    def test_anonymous_create_rejected(self, client, post_payload, services):
        response = client.post("/blog-posts", json=post_payload)

        assert response.status_code == 401
        assert services["blog"].read_index() == []

    def test_duplicate_slug(self, admin_client, created, post_payload):
        response = admin_client.post("/blog-posts", json=post_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert "slug" in body["error"]["details"]

    @pytest.mark.parametrize("slug", ["Has Spaces", "UPPER", "under_score"])
    def test_bad_slug(self, admin_client, post_payload, slug):
        response = admin_client.post("/blog-posts", json={**post_payload, "slug": slug})

        assert response.status_code == 422

    def test_unknown_category(self, admin_client, post_payload):
        response = admin_client.post("/blog-posts", json={**post_payload, "category": "Gossip"})

        assert response.status_code == 422

    def test_update(self, admin_client, created):
        response = admin_client.put("/blog-posts", json={"id": created["id"], "featured": True})

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["featured"] is True
        assert data["title"] == created["title"]
        assert data["created_at"] == created["created_at"]

    def test_update_unknown(self, admin_client):
        response = admin_client.put("/blog-posts", json={"id": "nope", "title": "X"})

        assert response.status_code == 404

    def test_delete(self, admin_client, client, created):
        response = admin_client.delete("/blog-posts", params={"id": created["id"]})

        assert response.json()["data"]["deleted"] is True
        assert client.get("/blog-posts").json()["data"] == []

    def test_delete_requires_id(self, admin_client):
        response = admin_client.delete("/blog-posts")

        assert response.status_code == 400
        assert "id" in response.json()["error"]["details"]
