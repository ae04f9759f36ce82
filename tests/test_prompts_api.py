"""
API tests for the prompt gallery and admin-only prompt management
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.catalog.crud import PromptCRUD
from app.models.prompt import Prompt
from app.models.user_profile import UserRole
from conftest import FIXED_NOW, auth_headers


PROMPTS_URL = "/api/v1/prompts/"

NEW_PROMPT = {
    "title": "Logo brief",
    "description": "Generate a logo brief",
    "content": "You are a brand designer...",
    "tags": "branding, logo, ",
    "author": "Admin",
    "category": "Art",
}


class TestPublicCatalog:

    def test_list_is_public_and_newest_first(self, client, make_prompt):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        make_prompt(title="old", created_at=base - timedelta(days=2))
        make_prompt(title="new", created_at=base)
        make_prompt(title="middle", created_at=base - timedelta(days=1))

        response = client.get(PROMPTS_URL)

        assert response.status_code == 200
        body = response.json()
        assert [p["title"] for p in body["items"]] == ["new", "middle", "old"]
        assert body["total"] == 3
        assert body["error"] is None

    def test_list_filters_by_category_and_search(self, client, make_prompt):
        make_prompt(title="Minimal logo", category="Art")
        make_prompt(title="Landscape", category="Art")
        make_prompt(title="Logo taglines", category="Writing")

        response = client.get(PROMPTS_URL, params={"category": "Art", "search": "LOGO"})

        assert [p["title"] for p in response.json()["items"]] == ["Minimal logo"]

    def test_unknown_category_is_rejected(self, client):
        response = client.get(PROMPTS_URL, params={"category": "Music"})

        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_storage_failure_degrades_to_empty_listing(self, client, monkeypatch):
        def broken(db):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(PromptCRUD, "list_all", staticmethod(broken))

        response = client.get(PROMPTS_URL)

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["error"]

    def test_get_single_prompt(self, client, make_prompt):
        prompt = make_prompt(title="Single")

        response = client.get(f"{PROMPTS_URL}{prompt.id}")

        assert response.status_code == 200
        assert response.json()["title"] == "Single"

    def test_get_missing_prompt(self, client):
        response = client.get(f"{PROMPTS_URL}{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"


class TestPromptMutations:

    def test_admin_creates_prompt(self, client, make_user):
        admin_id = make_user(UserRole.ADMIN)

        response = client.post(PROMPTS_URL, json=NEW_PROMPT, headers=auth_headers(admin_id))

        assert response.status_code == 201
        body = response.json()
        assert body["likes"] == 0
        assert body["tags"] == ["branding", "logo"]
        assert body["user_id"] == str(admin_id)

    def test_server_controlled_fields_are_ignored(self, client, make_user):
        admin_id = make_user(UserRole.ADMIN)
        payload = {**NEW_PROMPT, "likes": 999, "id": str(uuid.uuid4())}

        response = client.post(PROMPTS_URL, json=payload, headers=auth_headers(admin_id))

        assert response.json()["likes"] == 0
        assert response.json()["id"] != payload["id"]

    def test_non_admin_roles_cannot_create(self, client, make_user, db):
        for role in (UserRole.NORMAL, UserRole.VIP, UserRole.SVIP):
            user_id = make_user(role)
            response = client.post(PROMPTS_URL, json=NEW_PROMPT, headers=auth_headers(user_id))

            assert response.status_code == 403
            assert response.json()["code"] == "forbidden"
        assert db.query(Prompt).count() == 0

    def test_anonymous_cannot_create(self, client):
        response = client.post(PROMPTS_URL, json=NEW_PROMPT)

        assert response.status_code == 401
        assert response.json()["code"] == "unauthenticated"

    def test_invalid_token_is_rejected(self, client):
        response = client.post(
            PROMPTS_URL, json=NEW_PROMPT, headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401

    def test_invalid_payload_is_rejected(self, client, make_user):
        admin_id = make_user(UserRole.ADMIN)

        bad_category = client.post(
            PROMPTS_URL, json={**NEW_PROMPT, "category": "Music"}, headers=auth_headers(admin_id)
        )
        blank_title = client.post(
            PROMPTS_URL, json={**NEW_PROMPT, "title": "   "}, headers=auth_headers(admin_id)
        )

        assert bad_category.status_code == 422
        assert blank_title.status_code == 422

    @pytest.mark.parametrize("tags", [5, [1, 2], {"logo": 1}, ["ok", None]])
    def test_malformed_tags_are_rejected(self, client, make_user, db, tags):
        admin_id = make_user(UserRole.ADMIN)

        response = client.post(
            PROMPTS_URL, json={**NEW_PROMPT, "tags": tags}, headers=auth_headers(admin_id)
        )

        assert response.status_code == 422
        assert db.query(Prompt).count() == 0

    def test_malformed_tags_are_rejected_on_update(self, client, make_user, make_prompt):
        admin_id = make_user(UserRole.ADMIN)
        prompt = make_prompt(tags=["keep"])

        response = client.put(
            f"{PROMPTS_URL}{prompt.id}", json={"tags": {"x": 1}}, headers=auth_headers(admin_id)
        )

        assert response.status_code == 422
        assert client.get(f"{PROMPTS_URL}{prompt.id}").json()["tags"] == ["keep"]

    def test_update_preserves_likes(self, client, make_user, make_prompt):
        admin_id = make_user(UserRole.ADMIN)
        prompt = make_prompt(likes=12)

        response = client.put(
            f"{PROMPTS_URL}{prompt.id}",
            json={"title": "Renamed", "category": "Productivity"},
            headers=auth_headers(admin_id),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Renamed"
        assert body["category"] == "Productivity"
        assert body["likes"] == 12
        assert body["description"] == prompt.description

    def test_vip_cannot_update_or_delete(self, client, make_user, make_prompt):
        vip_id = make_user(UserRole.VIP, FIXED_NOW + timedelta(days=30))
        prompt = make_prompt()

        update = client.put(
            f"{PROMPTS_URL}{prompt.id}", json={"title": "Hijack"}, headers=auth_headers(vip_id)
        )
        delete = client.delete(f"{PROMPTS_URL}{prompt.id}", headers=auth_headers(vip_id))

        assert update.status_code == 403
        assert delete.status_code == 403
        assert client.get(f"{PROMPTS_URL}{prompt.id}").json()["title"] == prompt.title

    def test_admin_deletes_prompt(self, client, make_user, make_prompt):
        admin_id = make_user(UserRole.ADMIN)
        prompt = make_prompt()

        response = client.delete(f"{PROMPTS_URL}{prompt.id}", headers=auth_headers(admin_id))

        assert response.status_code == 204
        assert client.get(f"{PROMPTS_URL}{prompt.id}").status_code == 404

    def test_delete_missing_prompt(self, client, make_user):
        admin_id = make_user(UserRole.ADMIN)

        response = client.delete(f"{PROMPTS_URL}{uuid.uuid4()}", headers=auth_headers(admin_id))

        assert response.status_code == 404


class TestLikeEndpoint:

    def test_like_without_authentication(self, client, make_prompt):
        prompt = make_prompt(likes=5)

        first = client.post(f"{PROMPTS_URL}{prompt.id}/like")
        second = client.post(f"{PROMPTS_URL}{prompt.id}/like")

        assert first.status_code == 200
        assert first.json()["likes"] == 6
        assert second.json()["likes"] == 7

    def test_like_missing_prompt(self, client):
        response = client.post(f"{PROMPTS_URL}{uuid.uuid4()}/like")

        assert response.status_code == 404
