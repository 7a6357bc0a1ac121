"""
pytest configuration and fixtures for the book catalog test suite
The API runs in-process against an in-memory MongoDB (mongomock-motor).
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app import app
from config.settings import BOOKS_COLLECTION
from database import connection


@pytest.fixture
def books_db(monkeypatch):
    """Fresh in-memory database installed as the global database handle"""
    client = AsyncMongoMockClient()
    database = client["bookdb_test"]
    monkeypatch.setattr(connection, "db", database)
    return database


@pytest.fixture
def books_collection(books_db):
    return books_db[BOOKS_COLLECTION]


@pytest_asyncio.fixture
async def api_client(books_db):
    """HTTP client bound to the FastAPI app (lifespan not run)"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def create_book(api_client):
    """Factory creating a book through the API and returning its JSON"""

    async def _create(**fields):
        payload = {"title": "Clean Code", "author": "Robert Martin"}
        payload.update(fields)
        response = await api_client.post("/books", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
