# tests/conftest.py
"""Shared fixtures: an in-memory store per test, seeded users and blogs, auth headers."""

import os

# Set before the app is imported; config reads the environment at import time
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import mongomock
import pytest
from fastapi.testclient import TestClient

from bloglist.database.connection import ensure_indexes, get_db
from bloglist.main import app
from bloglist.utils.security import create_access_token, hash_password

INITIAL_BLOGS = [
    {
        "title": "React patterns",
        "author": "Michael Chan",
        "url": "https://reactpatterns.com/",
        "likes": 7,
    },
    {
        "title": "Go To Statement Considered Harmful",
        "author": "Edsger W. Dijkstra",
        "url": "http://www.u.arizona.edu/~rubinson/copyright_violations/Go_To_Considered_Harmful.html",
        "likes": 5,
    },
    {
        "title": "Canonical string reduction",
        "author": "Edsger W. Dijkstra",
        "url": "http://www.cs.utexas.edu/~EWD/transcriptions/EWD08xx/EWD808.html",
        "likes": 12,
    },
]


def token_for(user) -> str:
    return create_access_token({"sub": user["username"], "id": str(user["_id"])})


def blogs_in_db(db):
    return list(db.blogs.find())


@pytest.fixture
def db():
    mongo = mongomock.MongoClient()
    database = mongo["bloglist_test"]
    ensure_indexes(database)
    yield database
    mongo.close()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _insert_user(db, username, name, password):
    doc = {
        "username": username,
        "name": name,
        "passwordHash": hash_password(password),
        "blogs": [],
    }
    doc["_id"] = db.users.insert_one(doc).inserted_id
    return doc


@pytest.fixture
def root_user(db):
    return _insert_user(db, "root", "Superuser", "sekret")


@pytest.fixture
def other_user(db):
    return _insert_user(db, "mluukkai", "Matti Luukkainen", "salainen")


@pytest.fixture
def seeded_blogs(db, root_user):
    docs = [dict(blog, user=root_user["_id"]) for blog in INITIAL_BLOGS]
    ids = db.blogs.insert_many(docs).inserted_ids
    db.users.update_one({"_id": root_user["_id"]}, {"$set": {"blogs": ids}})
    return list(db.blogs.find())


@pytest.fixture
def auth_headers(root_user):
    return {"Authorization": f"Bearer {token_for(root_user)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {token_for(other_user)}"}
