import os
import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL

from app.core import db as db_module
from app.core.security import hash_password
from app.main import app
from app.models.user import User
from app.services.avatar import gravatar_url

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    await _init_test_db()
    # Use ASGITransport without lifespan parameter (not supported in all httpx versions)
    try:
        transport = ASGITransport(app=app, lifespan="off")
    except TypeError:
        # Fallback for httpx versions that don't support lifespan parameter
        transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def create_user(client):
    """
    Factory fixture to create users directly via ORM.
    """

    async def _create_user(name: str = "Dev User", password: str = "UserPass!23") -> tuple[User, str]:
        email = f"{uuid.uuid4().hex[:8]}@devs.io"
        user = await User.create(
            name=name,
            email=email,
            avatar=gravatar_url(email),
            password_hash=hash_password(password),
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def register(client):
    """
    Helper fixture: register through the API and return (token headers, email).
    """

    async def _register(name: str = "Dev User", password: str = "secret1") -> tuple[dict[str, str], str]:
        email = f"{uuid.uuid4().hex[:8]}@devs.io"
        resp = await client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        return {"x-auth-token": resp.json()["token"]}, email

    return _register
