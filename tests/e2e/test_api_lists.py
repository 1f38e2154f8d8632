import pytest
from fastapi.testclient import TestClient

from listo.main import create_app
from listo.schemas import ShoppingListCreate, UserCreate
from listo.storage import MemoryStorage


@pytest.mark.e2e
class TestListCrud:

    def test_create_list(self, client, auth_headers, alice):
        response = client.post(
            "/api/lists",
            json={"name": "Groceries", "date_planned": "2026-10-20", "time_planned": "17:30"},
            headers=auth_headers(alice),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Groceries"
        assert data["owner_id"] == alice.id
        assert data["owner_name"] == "Alice"
        assert data["color"] == "#22c55e"
        assert data["time_planned"] == "17:30"

    def test_owner_comes_from_token(self, client, auth_headers, alice, bob):
        response = client.post(
            "/api/lists",
            json={"name": "Groceries", "owner_id": bob.id},
            headers=auth_headers(alice),
        )
        assert response.json()["owner_id"] == alice.id

    def test_create_list_requires_name(self, client, auth_headers, alice):
        response = client.post("/api/lists", json={"description": "no name"}, headers=auth_headers(alice))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"

    def test_get_lists_owned_then_shared(self, client, storage, auth_headers, alice, bob):
        theirs = storage.create_list(bob.id, ShoppingListCreate(name="Bob's"))
        mine = storage.create_list(alice.id, ShoppingListCreate(name="Mine"))
        storage.add_list_participant(theirs.id, alice.id)

        response = client.get("/api/lists", headers=auth_headers(alice))

        assert response.status_code == 200
        assert [lst["id"] for lst in response.json()] == [mine.id, theirs.id]

    def test_get_single_list(self, client, auth_headers, alice):
        created = client.post("/api/lists", json={"name": "Groceries"}, headers=auth_headers(alice)).json()

        response = client.get(f"/api/lists/{created['id']}", headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing_list(self, client, auth_headers, alice):
        response = client.get("/api/lists/9999", headers=auth_headers(alice))

        assert response.status_code == 404
        assert response.json() == {"message": "List not found"}

    def test_update_list(self, client, auth_headers, alice):
        created = client.post(
            "/api/lists",
            json={"name": "Groceries", "date_planned": "2026-10-20"},
            headers=auth_headers(alice),
        ).json()

        response = client.put(
            f"/api/lists/{created['id']}",
            json={"name": "Weekly shop", "time_planned": "09:00", "id": 777},
            headers=auth_headers(alice),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["name"] == "Weekly shop"
        assert data["date_planned"] == "2026-10-20"
        assert data["time_planned"] == "09:00"

    def test_delete_list(self, client, auth_headers, alice):
        created = client.post("/api/lists", json={"name": "Groceries"}, headers=auth_headers(alice)).json()

        response = client.delete(f"/api/lists/{created['id']}", headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json() == {"message": "List deleted"}
        assert client.get(f"/api/lists/{created['id']}", headers=auth_headers(alice)).status_code == 404


@pytest.mark.e2e
class TestListPermissions:

    @pytest.fixture
    def groceries(self, client, auth_headers, alice):
        return client.post("/api/lists", json={"name": "Groceries"}, headers=auth_headers(alice)).json()

    def test_stranger_cannot_read(self, client, auth_headers, groceries, carol):
        response = client.get(f"/api/lists/{groceries['id']}", headers=auth_headers(carol))
        assert response.status_code == 403

    def test_participant_can_read_but_not_modify(self, client, storage, auth_headers, groceries, bob):
        storage.add_list_participant(groceries["id"], bob.id)

        assert client.get(f"/api/lists/{groceries['id']}", headers=auth_headers(bob)).status_code == 200
        assert client.put(
            f"/api/lists/{groceries['id']}", json={"name": "Mine now"}, headers=auth_headers(bob)
        ).status_code == 403
        assert client.delete(f"/api/lists/{groceries['id']}", headers=auth_headers(bob)).status_code == 403

    def test_missing_list_is_404_for_anyone(self, client, auth_headers, carol):
        assert client.put("/api/lists/9999", json={"name": "x"}, headers=auth_headers(carol)).status_code == 404
        assert client.delete("/api/lists/9999", headers=auth_headers(carol)).status_code == 404


class ExplodingStorage(MemoryStorage):
    def get_user_lists(self, user_id):
        raise RuntimeError("database on fire")


@pytest.mark.e2e
def test_unexpected_error_is_hidden(auth_headers):
    storage = ExplodingStorage()
    user = storage.create_user(
        UserCreate(username="erin", name="Erin", email="erin@example.com", password="x")
    )
    client = TestClient(create_app(storage=storage), raise_server_exceptions=False)

    response = client.get("/api/lists", headers=auth_headers(user))

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}
