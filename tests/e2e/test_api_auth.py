import pytest

from listo.schemas import ListItemCreate, ShoppingListCreate


def register(client, email="dana@example.com", password="hunter22", name="Dana", **extra):
    return client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name, **extra},
    )


@pytest.mark.e2e
class TestRegistration:

    def test_register_returns_public_user(self, client):
        response = register(client, username="dana")

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "dana"
        assert data["email"] == "dana@example.com"
        assert "password" not in data

    def test_username_defaults_to_email(self, client, storage):
        response = register(client)

        assert response.status_code == 201
        assert response.json()["username"] == "dana@example.com"
        assert storage.get_user_by_username("dana@example.com") is not None

    def test_password_is_stored_hashed(self, client, storage):
        register(client)

        stored = storage.get_user_by_email("dana@example.com")
        assert stored.password != "hunter22"
        assert stored.password.startswith("$2")

    def test_duplicate_email_rejected(self, client):
        register(client)
        response = register(client, name="Someone else")

        assert response.status_code == 400
        assert response.json() == {"message": "Email 'dana@example.com' is already registered"}

    def test_password_limit_counts_bytes(self, client, storage):
        # 40 characters, 80 bytes in UTF-8
        response = register(client, password="é" * 40)

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["password"]
        assert storage.get_user_by_email("dana@example.com") is None

    def test_non_ascii_password_within_limit(self, client):
        register(client, password="zażółć gęślą")

        response = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "zażółć gęślą"})
        assert response.status_code == 200

    def test_username_cannot_look_like_an_email(self, client):
        response = register(client, email="mallory@example.com", username="victim@example.com")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "username"

        # the address stays free for its owner
        assert register(client, email="victim@example.com").status_code == 201

    def test_invalid_body_lists_field_errors(self, client):
        response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "x"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid data"
        fields = {error["field"] for error in body["errors"]}
        assert {"email", "password", "name"} <= fields


@pytest.mark.e2e
class TestLogin:

    def test_json_login_issues_working_token(self, client):
        register(client)

        response = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "hunter22"})

        assert response.status_code == 200
        token = response.json()["access_token"]
        assert response.json()["token_type"] == "bearer"

        me = client.get("/api/auth/users/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "dana@example.com"

    def test_form_login(self, client):
        register(client, username="dana")

        response = client.post("/api/auth/token", data={"username": "dana", "password": "hunter22"})

        assert response.status_code == 200
        assert response.json()["access_token"]

    def test_wrong_password(self, client):
        register(client)

        response = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "nope"})

        assert response.status_code == 400
        assert response.json() == {"message": "Incorrect email or password"}

    def test_unknown_user(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
        assert response.status_code == 400


@pytest.mark.e2e
class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get("/api/lists")

        assert response.status_code == 401
        assert "message" in response.json()

    def test_invalid_token(self, client):
        response = client.get("/api/lists", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_token_for_deleted_user_id(self, client, auth_headers, alice):
        alice.id = 999
        response = client.get("/api/lists", headers=auth_headers(alice))
        assert response.status_code == 401

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/auth/users/me"),
            ("get", "/api/lists"),
            ("post", "/api/lists"),
            ("get", "/api/lists/1"),
            ("put", "/api/lists/1"),
            ("delete", "/api/lists/1"),
            ("get", "/api/lists/1/items"),
            ("post", "/api/lists/1/items"),
            ("put", "/api/lists/1/items/1"),
            ("delete", "/api/lists/1/items/1"),
            ("get", "/api/lists/1/participants"),
            ("post", "/api/lists/1/share"),
            ("delete", "/api/lists/1/participants/1"),
            ("put", "/api/users/1"),
        ],
    )
    def test_every_protected_route_requires_token(self, client, storage, alice, method, path):
        lst = storage.create_list(alice.id, ShoppingListCreate(name="Groceries"))
        storage.create_list_item(lst.id, ListItemCreate(name="Milk"))
        kwargs = {"json": {}} if method in ("post", "put") else {}

        response = client.request(method.upper(), path.replace("/1", f"/{lst.id}", 1), **kwargs)

        assert response.status_code == 401
        assert response.json() == {"message": "Not authenticated"}
        assert storage.get_list_by_id(lst.id).name == "Groceries"
        assert len(storage.get_list_items(lst.id)) == 1

    def test_malformed_body_is_rejected_before_authentication(self, client):
        # the body is decoded before dependencies run, so this is a 400 and not a 401
        response = client.post(
            "/api/lists", content=b"{bad", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid data"


@pytest.mark.e2e
def test_health_endpoints(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "running"
