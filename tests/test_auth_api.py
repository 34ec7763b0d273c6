"""
Auth API tests - registration, login and bearer-token handling.
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from skillswap.core.security import create_access_token, decode_access_token
from skillswap.db.session import get_db
from skillswap.main import create_app

# Smallest valid PNG header; content is never decoded server-side
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


async def register(client: AsyncClient, email: str, password: str = "password123", **fields):
    return await client.post(
        "/api/auth/register",
        data={"email": email, "password": password, **fields},
    )


@pytest.mark.asyncio
async def test_register_returns_token_and_user(client: AsyncClient, settings):
    response = await register(client, "a@x.com", dateOfBirth="1995-03-15", name="Alice")
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User registered successfully"
    assert data["user"]["email"] == "a@x.com"
    assert data["user"]["name"] == "Alice"
    assert data["user"]["profilePhoto"] is None
    payload = decode_access_token(data["token"], settings)
    assert payload["sub"] == str(data["user"]["id"])
    assert payload["email"] == "a@x.com"


@pytest.mark.asyncio
async def test_register_creates_empty_profile(client: AsyncClient):
    data = (await register(client, "a@x.com", dateOfBirth="1995-03-15")).json()
    me = await client.get("/api/users/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    profile = me.json()
    assert profile["dateOfBirth"] == "1995-03-15"
    assert profile["totalSwaps"] == 0
    assert profile["rating"] == 0
    assert profile["skillsOffered"] == []
    assert profile["skillsWanted"] == []


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client: AsyncClient):
    assert (await register(client, "a@x.com")).status_code == 201
    response = await register(client, "a@x.com", password="other")
    assert response.status_code == 409
    assert response.json() == {"error": "User already exists with this email"}


@pytest.mark.asyncio
async def test_register_rejects_invalid_email(client: AsyncClient):
    response = await register(client, "not-an-email")
    assert response.status_code == 400
    assert "email" in response.json()["error"]


@pytest.mark.asyncio
async def test_register_requires_password(client: AsyncClient):
    response = await client.post("/api/auth/register", data={"email": "a@x.com"})
    assert response.status_code == 400
    assert "password" in response.json()["error"]


@pytest.mark.asyncio
async def test_register_stores_and_serves_photo(client: AsyncClient, settings):
    response = await client.post(
        "/api/auth/register",
        data={"email": "a@x.com", "password": "password123"},
        files={"profilePhoto": ("me.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 201
    photo = response.json()["user"]["profilePhoto"]
    assert photo.startswith("/uploads/profilePhoto-")
    assert photo.endswith(".png")
    assert (settings.upload_dir / photo.rsplit("/", 1)[1]).exists()

    served = await client.get(photo)
    assert served.status_code == 200
    assert served.content == PNG_BYTES


@pytest.mark.asyncio
async def test_register_rejects_non_image_photo(client: AsyncClient, settings):
    response = await client.post(
        "/api/auth/register",
        data={"email": "a@x.com", "password": "password123"},
        files={"profilePhoto": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Only image files are allowed!"}
    assert not settings.upload_dir.exists() or not any(settings.upload_dir.iterdir())


@pytest.mark.asyncio
async def test_register_duplicate_discards_uploaded_photo(client: AsyncClient, settings):
    assert (await register(client, "a@x.com")).status_code == 201
    response = await client.post(
        "/api/auth/register",
        data={"email": "a@x.com", "password": "password123"},
        files={"profilePhoto": ("me.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 409
    assert not any(settings.upload_dir.iterdir())


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, settings):
    await register(client, "a@x.com", name="Alice")
    response = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "password123"})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"]["name"] == "Alice"
    assert decode_access_token(data["token"], settings)["sub"] == str(data["user"]["id"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password",
    [("a@x.com", "wrong-password"), ("nobody@x.com", "password123")],
)
async def test_login_invalid_credentials(client: AsyncClient, email: str, password: str):
    await register(client, "a@x.com")
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


@pytest.mark.asyncio
async def test_email_is_case_sensitive_as_stored(client: AsyncClient):
    await register(client, "Mixed@x.com")
    response = await client.post("/api/auth/login", json={"email": "mixed@x.com", "password": "password123"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(client: AsyncClient):
    response = await client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Access token required"}


@pytest.mark.asyncio
async def test_garbage_token_is_forbidden(client: AsyncClient):
    response = await client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403
    assert response.json() == {"error": "Invalid token"}


@pytest.mark.asyncio
async def test_token_for_deleted_user_is_unauthorized(client: AsyncClient, settings):
    token = create_access_token(999, settings)
    response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_tokens_follow_the_app_settings(session, settings):
    custom = settings.model_copy(update={"secret_key": "injected-secret", "jwt_expire_minutes": 5})
    app = create_app(custom)

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        response = await register(ac, "a@x.com")
        assert response.status_code == 201
        token = response.json()["token"]

        payload = jwt.decode(token, "injected-secret", algorithms=["HS256"])
        lifetime = payload["exp"] - datetime.now(timezone.utc).timestamp()
        assert 0 < lifetime <= 5 * 60

        me = await ac.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200

        foreign = create_access_token(payload["sub"], settings)
        rejected = await ac.get("/api/users/me", headers={"Authorization": f"Bearer {foreign}"})
        assert rejected.status_code == 403


@pytest.mark.asyncio
async def test_photo_extension_comes_from_content_type(client: AsyncClient):
    response = await client.post(
        "/api/auth/register",
        data={"email": "a@x.com", "password": "password123"},
        files={"profilePhoto": ("x.html", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 201
    photo = response.json()["user"]["profilePhoto"]
    assert photo.endswith(".png")

    served = await client.get(photo)
    assert served.headers["content-type"] == "image/png"


@pytest.mark.asyncio
async def test_register_rejects_svg_photo(client: AsyncClient):
    response = await client.post(
        "/api/auth/register",
        data={"email": "a@x.com", "password": "password123"},
        files={"profilePhoto": ("x.svg", b"<svg onload='alert(1)'/>", "image/svg+xml")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Only image files are allowed!"}
