# tests/domains/test_auth_n.py

"""
Testes de cadastro, login e do Access Guard.
"""

import pytest
from httpx import AsyncClient

from app.core.security import create_access_token
from app.domains.usr.models import User


@pytest.mark.asyncio
async def test_register_success(client: AsyncClient):
    """Cadastro público devolve 201 e nunca expõe a senha."""
    response = await client.post(
        "/users",
        json={"name": "Carlos Dias", "email": "carlos@vetly.com", "password": "senha-forte-1"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "carlos@vetly.com"
    assert body["imageUrl"] is None
    assert "password" not in body
    assert "passwordHash" not in body


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_user: User):
    response = await client.post(
        "/users",
        json={"name": "Outra Ana", "email": test_user.email, "password": "senha-forte-1"},
    )
    assert response.status_code == 409
    assert response.json()["error"] == "Email já cadastrado"


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient):
    response = await client.post(
        "/users",
        json={"name": "Carlos Dias", "email": "carlos@vetly.com", "password": "curta"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, test_user: User):
    response = await client.post("/login", json={"email": test_user.email, "password": "senha-segura-123"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"] == {"id": test_user.id, "name": test_user.name, "email": test_user.email}


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_are_indistinguishable(client: AsyncClient, test_user: User):
    """Senha errada e email desconhecido recebem a mesma resposta."""
    wrong_password = await client.post("/login", json={"email": test_user.email, "password": "errada-123"})
    unknown_email = await client.post("/login", json={"email": "ninguem@vetly.com", "password": "errada-123"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Email ou senha inválidos"}


@pytest.mark.asyncio
async def test_protected_route_without_token(client: AsyncClient):
    response = await client.get("/owners")
    assert response.status_code == 401
    assert response.json() == {"error": "Token não fornecido"}


@pytest.mark.asyncio
async def test_protected_route_with_malformed_token(client: AsyncClient):
    response = await client.get("/owners", headers={"Authorization": "Bearer nao.e.um.jwt"})
    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_protected_route_with_expired_token(client: AsyncClient, test_user: User):
    from datetime import timedelta

    token = create_access_token(user_id=test_user.id, email=test_user.email, expires_delta=timedelta(minutes=-5))
    response = await client.get("/owners", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_protected_route_with_valid_token(authorized_client: AsyncClient):
    response = await authorized_client.get("/owners")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_token_of_deleted_user_is_rejected(authorized_client: AsyncClient, test_user: User):
    """Depois da exclusão, o token antigo não cria mais registros."""
    response = await authorized_client.delete(f"/users/{test_user.id}")
    assert response.status_code == 200

    response = await authorized_client.post("/owners", json={"name": "Carla Mendes", "phone": "(11) 98888-7777"})
    assert response.status_code == 401
    assert response.json() == {"error": "Token inválido ou expirado"}


@pytest.mark.asyncio
async def test_token_for_unknown_user_is_rejected(client: AsyncClient):
    token = create_access_token(user_id=9999, email="fantasma@vetly.com")
    response = await client.get("/owners", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
