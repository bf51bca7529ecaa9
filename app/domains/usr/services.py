# app/domains/usr/services.py

"""
Regras do domínio 'usr' que envolvem mais de um componente.
"""

import logging
from typing import Optional

from fastapi import UploadFile
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.exceptions import ForbiddenError, ValidationError
from app.services.storage_service import ImageStorage
from app.utils.files import is_image_upload, read_upload_file
from . import crud as usr_crud
from . import models as usr_models

logger = logging.getLogger(__name__)


async def get_self_or_raise(db: AsyncSession, user_id: int, current_user_id: int, *, action: str) -> usr_models.User:
    """Usuário inexistente: 404. Conta de outra pessoa: 403."""
    db_user = await usr_crud.user.get_or_404(db, id=user_id)
    if db_user.id != current_user_id:
        logger.warning("Usuário %s tentou %s a conta %s", current_user_id, action, user_id)
        raise ForbiddenError(f"Você não tem permissão para {action} este usuário")
    return db_user


async def upload_user_image(
    db: AsyncSession,
    storage: ImageStorage,
    *,
    user_id: int,
    current_user_id: int,
    upload_file: Optional[UploadFile],
) -> usr_models.User:
    """
    Valida o arquivo, envia ao armazenamento e grava a URL no usuário.

    Nenhuma chamada ao armazenamento acontece antes de o arquivo passar pelas
    checagens de presença, tipo e tamanho.
    """
    if upload_file is None:
        raise ValidationError("Nenhuma imagem enviada")
    if not is_image_upload(upload_file):
        await upload_file.close()
        raise ValidationError("Apenas imagens são permitidas")

    data = await read_upload_file(
        upload_file,
        settings.MAX_IMAGE_SIZE_BYTES,
        too_large_message="A imagem deve ter no máximo 5MB",
    )
    if not data:
        raise ValidationError("Nenhuma imagem enviada")

    db_user = await get_self_or_raise(db, user_id, current_user_id, action="alterar a imagem de")

    image_url = await storage.upload_image(data, folder=settings.USER_IMAGE_FOLDER, filename=upload_file.filename)
    return await usr_crud.user.set_image_url(db, db_obj=db_user, image_url=image_url)
