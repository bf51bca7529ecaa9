# app/core/crud_base.py

"""
Classe base para operações CRUD (Create, Read, Update, Delete) assíncronas.
"""

from typing import Generic, List, Optional, Type, TypeVar, Any

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Operações genéricas sobre um modelo SQLModel.
    Cada operação de escrita é um único commit.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        return await db.get(self.model, id)

    async def get_multi(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100, **kwargs: Any
    ) -> List[ModelType]:
        """
        Lista registros ordenados por id. Aceita filtros de igualdade por atributo.
        """
        query = select(self.model)

        for field, value in kwargs.items():
            if hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)

        query = query.order_by(self.model.id).offset(skip).limit(limit)
        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any
    ) -> Optional[ModelType]:
        statement = select(self.model).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType, **extra: Any) -> ModelType:
        """
        Cria um registro a partir do schema de entrada.
        `extra` recebe colunas que não vêm do payload (ex.: user_id do token).
        """
        db_obj = self.model(**obj_in.model_dump(exclude_none=True), **extra)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: UpdateSchemaType
    ) -> ModelType:
        """
        Atualização parcial: aplica somente os campos presentes no payload
        (`exclude_unset`), inclusive valores como "" ou 0.
        """
        update_data = obj_in.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_obj, key, value)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """
        Remove pelo id. Os relacionamentos com cascade são removidos junto.
        """
        db_obj = await db.get(self.model, id)
        if db_obj:
            await db.delete(db_obj)
            await db.commit()
        return db_obj
