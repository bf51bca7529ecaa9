# app/core/security.py

"""
Utilitários de segurança da aplicação.

- Hash e verificação de senhas (bcrypt via passlib).
- Emissão e validação de JWT.
- Access Guard: dependência que valida o token Bearer e injeta o id do
  usuário autenticado nos handlers.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


# --- Hash de senhas ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify_password() -> None:
    pwd_context.dummy_verify()


# --- Esquema Bearer ---
# auto_error=False para devolver 401 no formato {"error": ...} em vez do 403 padrão.
bearer_scheme = HTTPBearer(auto_error=False)


# --- JWT ---
def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Gera o token de acesso com as claims `sub`, `userId`, `email` e `exp`.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(user_id), "userId": user_id, "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Valida assinatura e expiração. Qualquer falha vira UnauthorizedError.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info("Token rejeitado: %s", e)
        raise UnauthorizedError()

    user_id = payload.get("userId")
    if not isinstance(user_id, int):
        raise UnauthorizedError()
    return payload


# --- Access Guard ---
async def get_token_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    """
    Extrai o token do header `Authorization: Bearer <token>` e devolve o id do usuário.
    Só valida o token; a existência do usuário é conferida em `deps.get_current_user_id`.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Token não fornecido")
    payload = decode_access_token(credentials.credentials)
    return payload["userId"]
