"""API tests for the registration routes."""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from mud.kernel.errors import StorageError
from mud.kernel.ids import NIL_ID

BASE = "/v1/registrations"


def _create(client, registration_factory, **overrides) -> str:
    response = client.post(BASE, json=registration_factory.new_payload(**overrides))
    assert response.status_code == 200
    return response.json()["id"]


class TestCreate:
    def test_returns_id_as_utf8_json(self, client, registration_factory):
        response = client.post(BASE, json=registration_factory.new_payload())

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        body = response.json()
        assert list(body) == ["id"]
        assert UUID(body["id"]) != NIL_ID

    def test_password_is_decoded_from_base64(self, client, registration_factory, repository):
        registration_id = _create(client, registration_factory)

        assert repository.rows[UUID(registration_id)].password == bytes([1, 2, 3])

    def test_missing_fields_are_invalid_argument(self, client):
        response = client.post(BASE, json={"username": "alice"})

        assert response.status_code == 404
        assert response.json() == {
            "error": "Invalid Argument - name, password and email are required"
        }

    def test_malformed_json_is_bad_request(self, client, repository):
        response = client.post(
            BASE, content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("malformed request body")
        assert repository.writes == []

    def test_wrong_field_type_is_bad_request(self, client, registration_factory):
        payload = registration_factory.new_payload()
        payload["username"] = 5

        response = client.post(BASE, json=payload)

        assert response.status_code == 400
        assert "username" in response.json()["error"]


class TestRead:
    def test_list_returns_every_registration_without_passwords(
        self, client, registration_factory
    ):
        _create(client, registration_factory, username="alice", email="a@x.com")
        _create(client, registration_factory, username="bob", email="b@x.com")

        response = client.get(BASE)

        assert response.status_code == 200
        registrations = response.json()["registrations"]
        assert sorted(r["name"] for r in registrations) == ["alice", "bob"]
        assert all("password" not in r for r in registrations)

    def test_list_when_empty(self, client):
        response = client.get(BASE)

        assert response.status_code == 200
        assert response.json() == {"registrations": []}

    def test_get_by_id(self, client, registration_factory):
        registration_id = _create(client, registration_factory, shortbio="hello")

        response = client.get(BASE, params={"id": registration_id})

        assert response.status_code == 200
        assert response.json() == {
            "registration": {
                "id": registration_id,
                "name": "alice",
                "email": "a@x.com",
                "timezone": "UTC",
                "shortbio": "hello",
                "validated": False,
            }
        }

    def test_get_unknown_id_is_empty_object(self, client):
        response = client.get(BASE, params={"id": str(uuid4())})

        assert response.status_code == 200
        assert response.json() == {}

    @pytest.mark.parametrize("raw_id", ["", "not-a-uuid"])
    def test_get_with_bad_id_is_bad_request(self, client, raw_id):
        response = client.get(f"{BASE}?id={raw_id}")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_storage_failure_is_internal_error(self, client, repository):
        repository.fail_with = StorageError(message="db down")

        response = client.get(BASE)

        assert response.status_code == 500
        assert response.json() == {"error": "db down"}

    def test_unexpected_failure_is_internal_error(self, client, repository):
        repository.fail_with = RuntimeError("boom")

        response = client.get(BASE)

        assert response.status_code == 500
        assert response.json() == {"error": "boom"}


class TestUpdate:
    def test_partial_update_echoes_record(self, client, registration_factory):
        registration_id = _create(client, registration_factory)

        response = client.post(f"{BASE}/update", json={"id": registration_id, "shortbio": "hi"})

        assert response.status_code == 200
        assert response.json() == {
            "id": registration_id,
            "username": "alice",
            "timezone": "UTC",
            "shortbio": "hi",
            "email": "a@x.com",
        }

    def test_validated_and_password_are_applied(self, client, registration_factory, repository):
        registration_id = _create(client, registration_factory)

        response = client.post(
            f"{BASE}/update",
            json={"id": registration_id, "validated": True, "password": "BAUG"},
        )

        assert response.status_code == 200
        stored = repository.rows[UUID(registration_id)]
        assert stored.validated is True
        assert stored.password == bytes([4, 5, 6])

    def test_missing_id_is_invalid_argument(self, client):
        response = client.post(f"{BASE}/update", json={"username": "x"})

        assert response.status_code == 404
        assert response.json() == {"error": "Invalid Argument - must provide a UUID"}

    def test_unknown_id_is_not_found(self, client):
        unknown = uuid4()

        response = client.post(f"{BASE}/update", json={"id": str(unknown), "username": "x"})

        assert response.status_code == 404
        assert response.json() == {"error": f"Registration Not Found - for id {unknown}"}

    def test_malformed_id_is_bad_request(self, client):
        response = client.post(f"{BASE}/update", json={"id": "nope"})

        assert response.status_code == 400


class TestDelete:
    def test_delete_then_get_is_empty(self, client, registration_factory):
        registration_id = _create(client, registration_factory)

        response = client.delete(BASE, params={"id": registration_id})

        assert response.status_code == 200
        assert response.json() == {}
        assert client.get(BASE, params={"id": registration_id}).json() == {}

    def test_delete_without_id_is_bad_request(self, client):
        response = client.delete(BASE)

        assert response.status_code == 400
        assert response.json() == {"error": "Bad Route - missing id"}

    def test_delete_nil_id_is_invalid_argument(self, client, repository):
        response = client.delete(BASE, params={"id": str(NIL_ID)})

        assert response.status_code == 404
        assert response.json() == {"error": "Invalid Argument - must provide a UUID"}
        assert repository.writes == []


@pytest.mark.asyncio
async def test_scenario_over_async_client(async_client, registration_factory):
    created = await async_client.post(BASE, json=registration_factory.new_payload())
    registration_id = created.json()["id"]

    edited = await async_client.post(
        f"{BASE}/update", json={"id": registration_id, "shortbio": "hi"}
    )
    assert edited.json()["shortbio"] == "hi"

    deleted = await async_client.delete(BASE, params={"id": registration_id})
    assert deleted.status_code == 200

    listed = await async_client.get(BASE)
    assert listed.json() == {"registrations": []}
