import pytest


@pytest.mark.e2e
class TestProfileUpdate:

    def test_update_own_profile(self, client, storage, auth_headers, alice):
        response = client.put(
            f"/api/users/{alice.id}",
            json={"name": "Alice Cooper", "avatar_url": "https://example.com/new.png"},
            headers=auth_headers(alice),
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Alice Cooper"
        assert storage.get_user(alice.id).avatar_url == "https://example.com/new.png"

    def test_owner_name_follows_profile(self, client, auth_headers, alice):
        created = client.post("/api/lists", json={"name": "Groceries"}, headers=auth_headers(alice)).json()
        client.put(f"/api/users/{alice.id}", json={"name": "Ali"}, headers=auth_headers(alice))

        fetched = client.get(f"/api/lists/{created['id']}", headers=auth_headers(alice)).json()
        assert fetched["owner_name"] == "Ali"

    def test_clear_avatar(self, client, storage, auth_headers, alice):
        response = client.put(f"/api/users/{alice.id}", json={"avatar_url": None}, headers=auth_headers(alice))

        assert response.status_code == 200
        assert storage.get_user(alice.id).avatar_url is None

    def test_cannot_update_someone_else(self, client, storage, auth_headers, alice, bob):
        response = client.put(f"/api/users/{bob.id}", json={"name": "Hacked"}, headers=auth_headers(alice))

        assert response.status_code == 403
        assert storage.get_user(bob.id).name == "Bob"

    def test_empty_update(self, client, auth_headers, alice):
        response = client.put(f"/api/users/{alice.id}", json={}, headers=auth_headers(alice))

        assert response.status_code == 400
        assert response.json() == {"message": "Nothing to update"}

    def test_null_name_is_not_an_update(self, client, storage, auth_headers, alice):
        response = client.put(f"/api/users/{alice.id}", json={"name": None}, headers=auth_headers(alice))

        assert response.status_code == 400
        assert response.json() == {"message": "Nothing to update"}
        assert storage.get_user(alice.id).name == "Alice"

    def test_only_profile_fields_are_changed(self, client, storage, auth_headers, alice):
        client.put(
            f"/api/users/{alice.id}",
            json={"name": "Alice", "email": "evil@example.com", "password": "x"},
            headers=auth_headers(alice),
        )

        stored = storage.get_user(alice.id)
        assert stored.email == "alice@example.com"
        assert stored.password == "not-a-real-hash"
