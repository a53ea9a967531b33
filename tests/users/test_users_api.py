"""
Tests d'intégration pour les endpoints de l'API du module Utilisateur.
"""
import uuid
from datetime import timedelta

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy import func, select

from armoire.addresses.models import Address
from armoire.config import settings
from armoire.core.utils import as_utc, utcnow
from armoire.users.models import User

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio


async def test_create_user_sends_verification_email(test_client: AsyncClient, mock_email_service):
    user_data = {"email": "newuser@example.com", "userName": "new_user", "phone": "0612345678"}

    response = await test_client.post(f"{API_PREFIX}/users", json=user_data)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["email"] == user_data["email"]
    assert data["userName"] == "new_user"
    assert data["role"] == "CUSTOMER"
    assert data["emailVerified"] is False
    assert data["addresses"] == []
    assert "verificationToken" not in data

    mock_email_service.send_verification_email.assert_awaited_once()
    call_args = mock_email_service.send_verification_email.call_args[1]
    assert call_args["recipient_email"] == "newuser@example.com"
    assert call_args["token"]


async def test_create_user_duplicate_email_conflict(test_client: AsyncClient, test_user):
    response = await test_client.post(
        f"{API_PREFIX}/users",
        json={"email": "testuser@example.com", "userName": "someone_else"},
    )
    assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.parametrize("user_name", ["ab", "bad name!", "x" * 51])
async def test_create_user_invalid_user_name(test_client: AsyncClient, user_name):
    response = await test_client.post(
        f"{API_PREFIX}/users",
        json={"email": "valid@example.com", "userName": user_name},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_get_profile_includes_addresses(test_client: AsyncClient, test_user, make_address):
    user_id = test_user.id
    await make_address(test_user, is_default=True)
    await make_address(test_user, city="Annecy")

    response = await test_client.get(f"{API_PREFIX}/users/{user_id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == str(user_id)
    assert data["userName"] == "test_user"
    assert [a["city"] for a in data["addresses"]] == ["Lyon", "Annecy"]
    assert "userId" not in data["addresses"][0]


async def test_get_unknown_user_returns_404(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/users/{uuid.uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_update_profile_partial(test_client: AsyncClient, test_user, mock_email_service):
    user_id = test_user.id

    response = await test_client.patch(f"{API_PREFIX}/users/{user_id}", json={"phone": "0700000000"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["phone"] == "0700000000"
    assert data["userName"] == "test_user"
    assert data["email"] == "testuser@example.com"
    mock_email_service.send_verification_email.assert_not_awaited()


async def test_update_profile_email_change_resets_verification(test_client: AsyncClient, db_session, test_user, mock_email_service):
    user_id = test_user.id
    test_user.email_verified = True
    await db_session.commit()

    response = await test_client.patch(f"{API_PREFIX}/users/{user_id}", json={"email": "changed@example.com"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == "changed@example.com"
    assert response.json()["emailVerified"] is False
    mock_email_service.send_verification_email.assert_awaited_once()


async def test_update_profile_email_already_taken(test_client: AsyncClient, test_user, test_user_2):
    user_id = test_user.id
    response = await test_client.patch(f"{API_PREFIX}/users/{user_id}", json={"email": "testuser2@example.com"})
    assert response.status_code == status.HTTP_409_CONFLICT


async def test_delete_user_removes_addresses(test_client: AsyncClient, db_session, test_user, test_user_2, make_address):
    user_id, other_id = test_user.id, test_user_2.id
    await make_address(test_user, is_default=True)
    await make_address(test_user)
    await make_address(test_user_2)

    response = await test_client.delete(f"{API_PREFIX}/users/{user_id}")

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert (await test_client.get(f"{API_PREFIX}/users/{user_id}")).status_code == status.HTTP_404_NOT_FOUND
    remaining = await db_session.scalar(select(func.count()).select_from(Address).where(Address.user_id == user_id))
    assert remaining == 0
    others = await db_session.scalar(select(func.count()).select_from(Address).where(Address.user_id == other_id))
    assert others == 1


async def test_delete_unknown_user_returns_404(test_client: AsyncClient):
    response = await test_client.delete(f"{API_PREFIX}/users/{uuid.uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_verify_email_with_valid_token(test_client: AsyncClient, db_session, test_user):
    user_id = test_user.id
    test_user.verification_token = "valid-token"
    test_user.verification_token_expiry = utcnow() + timedelta(hours=1)
    await db_session.commit()

    response = await test_client.post(f"{API_PREFIX}/users/verify-email", params={"token": "valid-token"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] is True
    user = await db_session.get(User, user_id, populate_existing=True)
    assert user.email_verified is True
    assert user.verification_token is None


@pytest.mark.parametrize("expiry_delta", [timedelta(hours=-1), None])
async def test_verify_email_with_expired_or_unknown_token(test_client: AsyncClient, db_session, test_user, expiry_delta):
    token = "old-token" if expiry_delta is not None else "missing-token"
    if expiry_delta is not None:
        test_user.verification_token = "old-token"
        test_user.verification_token_expiry = utcnow() + expiry_delta
        await db_session.commit()

    response = await test_client.post(f"{API_PREFIX}/users/verify-email", params={"token": token})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_password_reset_known_email_sends_mail(test_client: AsyncClient, db_session, test_user, mock_email_service):
    user_id = test_user.id

    response = await test_client.post(f"{API_PREFIX}/users/password-reset", json={"email": "testuser@example.com"})

    assert response.status_code == status.HTTP_202_ACCEPTED
    user = await db_session.get(User, user_id, populate_existing=True)
    assert user.password_reset_token
    assert as_utc(user.password_reset_token_expiry) > utcnow()
    mock_email_service.send_password_reset_email.assert_awaited_once()
    assert mock_email_service.send_password_reset_email.call_args[1]["token"] == user.password_reset_token


async def test_password_reset_unknown_email_is_silent(test_client: AsyncClient, mock_email_service):
    response = await test_client.post(f"{API_PREFIX}/users/password-reset", json={"email": "nobody@example.com"})

    assert response.status_code == status.HTTP_202_ACCEPTED
    mock_email_service.send_password_reset_email.assert_not_awaited()
