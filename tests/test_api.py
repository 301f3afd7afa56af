"""
End-to-end tests through the HTTP surface.

The app runs on an in-memory SQLite database and the upstream catalog is an
httpx.MockTransport.
"""

import uuid
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

SECRET = "test-jwt-secret-for-testing-only-0123456789"

PRODUCTS = [
    {"id": 1, "title": "Budget Phone", "price": 99.0, "category": "smartphones"},
    {"id": 2, "title": "Mid Phone", "price": 150.0, "category": "smartphones"},
    {"id": 3, "title": "Flagship", "price": 999.0, "category": "smartphones"},
]


def _catalog_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/products/category-list":
        return httpx.Response(200, json=["laptops", "smartphones"])
    if request.url.path == "/products/category/broken":
        return httpx.Response(503, text="maintenance")
    return httpx.Response(
        200,
        json={
            "products": PRODUCTS,
            "total": 194,
            "skip": int(request.url.params.get("skip", 0)),
            "limit": int(request.url.params.get("limit", 0)),
        },
    )


def _settings(**overrides) -> Settings:
    values = {
        "_env_file": None,
        "jwt_secret": SECRET,
        "database_url": "sqlite+aiosqlite://",
        "bcrypt_rounds": 4,
        "catalog_base_url": "https://catalog.test",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client():
    app = create_app(_settings(), catalog_transport=httpx.MockTransport(_catalog_handler))
    with TestClient(app) as c:
        yield c


ALICE = {
    "name": "Alice",
    "username": "alice",
    "email": "alice@x.com",
    "password": "secret1",
}


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestRegisterLoginProfile:
    def test_register_login_profile_flow(self, client):
        res = client.post("/api/register", json=ALICE)
        assert res.status_code == 201, res.text
        body = res.json()
        assert body["token"]
        assert body["user"]["username"] == "alice"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

        res = client.post("/api/login", json={"username": "alice", "password": "secret1"})
        assert res.status_code == 200, res.text
        token = res.json()["token"]
        assert token

        res = client.get("/api/profile", headers=_auth(token))
        assert res.status_code == 200, res.text
        user = res.json()["user"]
        assert (user["name"], user["username"], user["email"]) == ("Alice", "alice", "alice@x.com")
        assert user["id"] == body["user"]["id"]
        assert user["created_at"]

    def test_duplicate_email(self, client):
        assert client.post("/api/register", json=ALICE).status_code == 201

        res = client.post("/api/register", json={**ALICE, "username": "alice2"})
        assert res.status_code == 409
        assert res.json()["code"] == "EMAIL_EXISTS"

    def test_duplicate_username(self, client):
        assert client.post("/api/register", json=ALICE).status_code == 201

        res = client.post("/api/register", json={**ALICE, "email": "other@x.com"})
        assert res.status_code == 409
        assert res.json()["code"] == "USERNAME_EXISTS"

    def test_validation_error(self, client):
        res = client.post("/api/register", json={**ALICE, "username": "al ice"})
        assert res.status_code == 400
        assert res.json() == {
            "error": "username can only contain letters, numbers, and underscores",
            "code": "VALIDATION_ERROR",
        }

    def test_missing_field_is_400_not_422(self, client):
        res = client.post("/api/register", json={"name": "Alice"})
        assert res.status_code == 400
        body = res.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["error"] == "Validation failed"
        assert "username" in body["details"]

    def test_login_failures_are_uniform(self, client):
        client.post("/api/register", json=ALICE)

        wrong_password = client.post("/api/login", json={"username": "alice", "password": "secret2"})
        no_user = client.post("/api/login", json={"username": "nobody", "password": "secret1"})

        assert wrong_password.status_code == no_user.status_code == 401
        assert wrong_password.json() == no_user.json() == {
            "error": "Invalid username or password",
            "code": "INVALID_CREDENTIALS",
        }

    def test_logout_is_stateless(self, client):
        res = client.post("/api/logout")
        assert res.status_code == 200
        assert res.json() == {"message": "Logout successful"}


class TestProtectedRoutes:
    def test_missing_token(self, client):
        res = client.get("/api/profile")
        assert res.status_code == 401
        assert res.json()["code"] == "NOT_AUTHENTICATED"

    def test_garbage_token(self, client):
        res = client.get("/api/profile", headers=_auth("not.a.token"))
        assert res.status_code == 401
        assert res.json()["code"] == "INVALID_TOKEN"

    def test_expired_token(self, client):
        issuer = client.app.state.token_issuer
        token = issuer.issue(str(uuid.uuid4()), now=datetime.now(timezone.utc) - timedelta(days=2))
        res = client.get("/api/profile", headers=_auth(token))
        assert res.status_code == 401
        assert res.json()["code"] == "TOKEN_EXPIRED"

    def test_subject_no_longer_exists(self, client):
        token = client.app.state.token_issuer.issue(str(uuid.uuid4()))
        res = client.get("/api/profile", headers=_auth(token))
        assert res.status_code == 404
        assert res.json()["code"] == "USER_NOT_FOUND"

    def test_malformed_subject(self, client):
        token = client.app.state.token_issuer.issue("not-a-uuid")
        res = client.get("/api/profile", headers=_auth(token))
        assert res.status_code == 400
        assert res.json()["code"] == "INVALID_USER_ID"

    def test_checkout_placeholder(self, client):
        assert client.post("/api/checkout").status_code == 401

        token = client.post("/api/register", json=ALICE).json()["token"]
        res = client.post("/api/checkout", headers=_auth(token))
        assert res.status_code == 200
        assert res.json() == {"message": "Coming soon"}


class TestCatalogRoutes:
    def test_products_passthrough(self, client):
        res = client.get("/api/products", params={"limit": "500", "skip": "-5"})
        assert res.status_code == 200
        body = res.json()
        assert body["limit"] == 12
        assert body["skip"] == 0
        assert body["total"] == 194
        assert len(body["products"]) == 3

    def test_price_filter_rewrites_total(self, client):
        res = client.get("/api/products", params={"priceMin": "100", "priceMax": "200"})
        assert res.status_code == 200
        body = res.json()
        assert [p["id"] for p in body["products"]] == [2]
        assert body["total"] == 1

    def test_unparsable_price_bound_still_rewrites_total(self, client):
        res = client.get("/api/products", params={"priceMin": "cheap"})
        assert res.status_code == 200
        body = res.json()
        assert len(body["products"]) == 3
        assert body["total"] == 3

    def test_upstream_failure(self, client):
        res = client.get("/api/products", params={"category": "broken"})
        assert res.status_code == 502
        assert res.json()["code"] == "UPSTREAM_ERROR"

    def test_categories(self, client):
        res = client.get("/api/categories")
        assert res.status_code == 200
        assert res.json() == {"categories": ["laptops", "smartphones"]}


class TestAppSetup:
    def test_health(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok", "mode": "full"}
        assert "X-Process-Time" in res.headers

    def test_refuses_to_start_without_secret(self):
        from utils.errors import ConfigurationError

        with pytest.raises(ConfigurationError):
            create_app(_settings(jwt_secret="   "))
