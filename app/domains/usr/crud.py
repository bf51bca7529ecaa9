# app/domains/usr/crud.py

"""
CRUD do domínio 'usr'. O hash de senha (bcrypt) é executado em thread
separada para não bloquear o loop de eventos.
"""

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.exceptions import ConflictError, NotFoundError
from app.core.security import dummy_verify_password, get_password_hash, verify_password
from . import models as usr_models
from . import schemas as usr_schemas

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[usr_models.User, usr_schemas.UserCreate, usr_schemas.UserUpdate]):
    def __init__(self):
        super().__init__(model=usr_models.User)

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[usr_models.User]:
        return await self.get_by_attribute(db, attribute="email", value=email)

    async def get_or_404(self, db: AsyncSession, *, id: int) -> usr_models.User:
        db_user = await self.get(db, id=id)
        if db_user is None:
            raise NotFoundError("Usuário não encontrado")
        return db_user

    async def create(self, db: AsyncSession, *, obj_in: usr_schemas.UserCreate) -> usr_models.User:
        """Cadastra o usuário com a senha em hash. Email repetido gera 409."""
        if await self.get_by_email(db, email=obj_in.email):
            raise ConflictError("Email já cadastrado")

        hashed_password = await run_in_threadpool(get_password_hash, obj_in.password)
        db_user = usr_models.User.create(name=obj_in.name, email=obj_in.email, hashed_password=hashed_password)

        db.add(db_user)
        await db.commit()
        await db.refresh(db_user)
        logger.info("Usuário %s cadastrado", db_user.id)
        return db_user

    async def authenticate(self, db: AsyncSession, *, email: str, password: str) -> Optional[usr_models.User]:
        """Devolve o usuário se email e senha conferem; None em qualquer outro caso."""
        db_user = await self.get_by_email(db, email=email)
        if db_user is None:
            # Mesmo custo de bcrypt para email inexistente.
            await run_in_threadpool(dummy_verify_password)
            return None
        if not await run_in_threadpool(verify_password, password, db_user.password_hash):
            return None
        return db_user

    async def update(
        self, db: AsyncSession, *, db_obj: usr_models.User, obj_in: usr_schemas.UserUpdate
    ) -> usr_models.User:
        if "email" in obj_in.model_fields_set and obj_in.email != db_obj.email:
            existing = await self.get_by_email(db, email=obj_in.email)
            if existing is not None and existing.id != db_obj.id:
                raise ConflictError("Email já cadastrado")
        return await super().update(db, db_obj=db_obj, obj_in=obj_in)

    async def set_image_url(self, db: AsyncSession, *, db_obj: usr_models.User, image_url: str) -> usr_models.User:
        db_obj.image_url = image_url
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def remove(self, db: AsyncSession, *, id: int) -> usr_models.User:
        """Exclui o usuário com seus tutores, animais e prontuários."""
        await self.get_or_404(db, id=id)
        db_user = await super().delete(db, id=id)
        logger.info("Usuário %s excluído", id)
        return db_user


user = CRUDUser()
