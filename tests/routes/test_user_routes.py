# tests/routes/test_user_routes.py
"""Tests for logout, profile and admin endpoints."""

from io import BytesIO
from pathlib import Path

import pytest
from httpx import AsyncClient
from PIL import Image
from pytest import mark

from blogapi.dependencies import get_profile_service
from blogapi.main import app
from blogapi.services import ProfileService


def _png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color="red").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def uploads(tmp_path: Path, client: AsyncClient, user_repo) -> Path:
    """Store uploaded pictures under a temporary directory."""
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(user_repo, tmp_path)
    return tmp_path


@mark.asyncio
async def test_logout_revokes_refresh_tokens(
    client: AsyncClient,
    auth_headers,
    refresh_repo,
    sample_user,
    other_user,
    clock,
) -> None:
    await refresh_repo.store(sample_user.id, "mine", clock())
    await refresh_repo.store(other_user.id, "theirs", clock())

    response = await client.post("/user/logout", headers=auth_headers)

    assert response.json() == {"message": "Logout successful"}
    assert [row.token for row in refresh_repo.rows] == ["theirs"]


@mark.asyncio
async def test_logout_requires_auth(client: AsyncClient) -> None:
    response = await client.post("/user/logout")

    assert response.status_code == 401
    assert response.json() == {"error": "User not authenticated"}


@mark.asyncio
async def test_profile_me_uses_camel_case(client: AsyncClient, auth_headers, sample_user) -> None:
    response = await client.get("/user/profile/me", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["userId"] == str(sample_user.id)
    assert data["username"] == sample_user.username
    assert "profilePicture" in data
    assert "user_id" not in data


@mark.asyncio
async def test_update_profile(client: AsyncClient, auth_headers, sample_user) -> None:
    response = await client.put(
        "/user/profile",
        json={"username": "renamed", "bio": "   ", "profilePicture": "pics/me.png"},
        headers=auth_headers,
    )

    assert response.json() == {"message": "profile updated"}
    assert sample_user.username == "renamed"
    assert sample_user.bio is None
    assert sample_user.profile_picture == "pics/me.png"


@mark.asyncio
async def test_update_profile_username_taken(
    client: AsyncClient,
    auth_headers,
    other_user,
) -> None:
    response = await client.put(
        "/user/profile",
        json={"username": other_user.username},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "username already taken"


@mark.asyncio
async def test_upload_picture(client: AsyncClient, auth_headers, sample_user, uploads) -> None:
    response = await client.post(
        "/user/profile/picture",
        files={"profilePicture": ("me.PNG", _png_bytes(), "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile picture uploaded successfully"
    assert body["path"].endswith(f"profile_pictures/{sample_user.id}.png")
    assert (uploads / "profile_pictures" / f"{sample_user.id}.png").exists()
    assert sample_user.profile_picture == body["path"]


@mark.asyncio
async def test_upload_picture_missing_file(client: AsyncClient, auth_headers, uploads) -> None:
    response = await client.post("/user/profile/picture", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "No file uploaded"


@mark.asyncio
async def test_upload_picture_wrong_type(client: AsyncClient, auth_headers, uploads) -> None:
    response = await client.post(
        "/user/profile/picture",
        files={"profilePicture": ("notes.gif", b"GIF89a", "image/gif")},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid file type, only jpg/jpeg/png allowed"


@mark.asyncio
async def test_upload_picture_not_an_image(client: AsyncClient, auth_headers, uploads) -> None:
    response = await client.post(
        "/user/profile/picture",
        files={"profilePicture": ("fake.jpg", b"plain text", "image/jpeg")},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert list(uploads.iterdir()) == []


@mark.asyncio
async def test_admin_promote_and_demote(
    client: AsyncClient,
    admin_auth_headers,
    sample_user,
) -> None:
    promoted = await client.put(
        f"/user/admin/promote/{sample_user.id}",
        headers=admin_auth_headers,
    )
    assert promoted.json() == {"message": "User promoted to admin"}
    assert sample_user.role == "admin"

    demoted = await client.put(f"/user/admin/demote/{sample_user.id}", headers=admin_auth_headers)
    assert demoted.json() == {"message": "User demoted to regular user"}
    assert sample_user.role == "user"


@mark.asyncio
async def test_promote_requires_admin(client: AsyncClient, auth_headers, other_user) -> None:
    response = await client.put(f"/user/admin/promote/{other_user.id}", headers=auth_headers)

    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}
    assert other_user.role == "user"


@mark.asyncio
async def test_promote_invalid_id(client: AsyncClient, admin_auth_headers) -> None:
    response = await client.put("/user/admin/promote/abc", headers=admin_auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid user ID"
