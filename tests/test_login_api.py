"""Tests for /api/login and token resolution."""

from conftest import blogs_in_db
from bloglist.utils.security import create_access_token


def test_login_succeeds(client, root_user):
    response = client.post("/api/login", json={"username": "root", "password": "sekret"})
    assert response.status_code == 200

    body = response.json()
    assert body["username"] == "root"
    assert body["name"] == "Superuser"
    assert body["token"]


def test_login_token_can_create_blog(client, db, root_user):
    token = client.post("/api/login", json={"username": "root", "password": "sekret"}).json()["token"]

    blog = {"title": "Logged in", "url": "http://example.com"}
    response = client.post("/api/blogs", json=blog, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 201
    assert len(blogs_in_db(db)) == 1


def test_login_wrong_password(client, root_user):
    response = client.post("/api/login", json={"username": "root", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"error": "invalid username or password"}


def test_login_unknown_user(client):
    response = client.post("/api/login", json={"username": "nobody", "password": "sekret"})
    assert response.status_code == 401


def test_expired_token_is_rejected(client, db, root_user):
    token = create_access_token({"sub": "root", "id": str(root_user["_id"])}, expires_minutes=-1)

    blog = {"title": "Too late", "url": "http://example.com"}
    response = client.post("/api/blogs", json=blog, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert blogs_in_db(db) == []


def test_token_without_id_is_rejected(client, db, root_user):
    token = create_access_token({"sub": "root"})

    blog = {"title": "No id", "url": "http://example.com"}
    response = client.post("/api/blogs", json=blog, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_login_malformed_json(client):
    response = client.post(
        "/api/login",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Request validation failed: JSON decode error"}
