# app/core/dependencies.py

"""
Dependências compartilhadas pelos routers.

Os routers importam este módulo como `deps` e usam:
- `deps.get_db_session`: sessão assíncrona por requisição.
- `deps.get_current_user_id`: Access Guard (id do usuário autenticado).
- `deps.get_image_storage`: cliente do armazenamento de imagens.
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import get_session as get_main_app_session
from app.core.exceptions import UnauthorizedError

# flake8: noqa
from app.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    bearer_scheme,
    get_token_user_id,
)
from app.domains.usr import models as usr_models
from app.services.storage_service import ImageStorage

logger = logging.getLogger(__name__)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Encapsula `app.core.database.get_session`."""
    async for session in get_main_app_session(request):
        yield session


async def get_current_user_id(
    user_id: int = Depends(get_token_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> int:
    """
    Access Guard completo: token válido e usuário ainda cadastrado.
    Token de usuário excluído responde 401.
    """
    if await db.get(usr_models.User, user_id) is None:
        logger.info("Token válido para o usuário %s, que não existe mais", user_id)
        raise UnauthorizedError()
    return user_id


def get_image_storage(request: Request) -> ImageStorage:
    """Cliente de imagens criado no lifespan (ou substituído nos testes)."""
    return request.app.state.image_storage
