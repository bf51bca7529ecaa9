# app/domains/vet/crud.py

"""
CRUD do domínio 'vet'. As listagens são sempre filtradas pelo usuário
autenticado; as verificações de posse de um registro específico ficam em
`services.get_owned_or_raise`.
"""

from typing import List
import logging

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from . import models as vet_models
from . import schemas as vet_schemas

logger = logging.getLogger(__name__)

# Carregamento antecipado de animal + tutor para os prontuários.
RECORD_DETAIL_OPTIONS = (
    selectinload(vet_models.Record.animal).selectinload(vet_models.Animal.owner),
)


# =============================================================================
# 1. Tutor (Owner)
# =============================================================================
class CRUDOwner(CRUDBase[vet_models.Owner, vet_schemas.OwnerCreate, vet_schemas.OwnerUpdate]):
    def __init__(self):
        super().__init__(model=vet_models.Owner)

    async def get_multi_by_user(
        self, db: AsyncSession, *, user_id: int, skip: int = 0, limit: int = 100
    ) -> List[vet_models.Owner]:
        return await self.get_multi(db, skip=skip, limit=limit, user_id=user_id)

    async def create_for_user(
        self, db: AsyncSession, *, obj_in: vet_schemas.OwnerCreate, user_id: int
    ) -> vet_models.Owner:
        db_obj = await self.create(db, obj_in=obj_in, user_id=user_id)
        logger.info("Tutor %s criado pelo usuário %s", db_obj.id, user_id)
        return db_obj


owner = CRUDOwner()


# =============================================================================
# 2. Animal
# =============================================================================
class CRUDAnimal(CRUDBase[vet_models.Animal, vet_schemas.AnimalCreate, vet_schemas.AnimalUpdate]):
    def __init__(self):
        super().__init__(model=vet_models.Animal)

    async def get_multi_by_user(
        self, db: AsyncSession, *, user_id: int, skip: int = 0, limit: int = 100
    ) -> List[vet_models.Animal]:
        """Animais cujos tutores pertencem ao usuário."""
        statement = (
            select(vet_models.Animal)
            .join(vet_models.Owner, vet_models.Animal.owner_id == vet_models.Owner.id)
            .where(vet_models.Owner.user_id == user_id)
            .order_by(vet_models.Animal.id)
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(statement)
        return result.scalars().all()


animal = CRUDAnimal()


# =============================================================================
# 3. Prontuário (Record)
# =============================================================================
class CRUDRecord(CRUDBase[vet_models.Record, vet_schemas.RecordCreate, vet_schemas.RecordUpdate]):
    def __init__(self):
        super().__init__(model=vet_models.Record)

    async def get_multi_by_user(
        self, db: AsyncSession, *, user_id: int, skip: int = 0, limit: int = 100
    ) -> List[vet_models.Record]:
        """Prontuários do usuário, do atendimento mais recente para o mais antigo."""
        statement = (
            select(vet_models.Record)
            .join(vet_models.Animal, vet_models.Record.animal_id == vet_models.Animal.id)
            .join(vet_models.Owner, vet_models.Animal.owner_id == vet_models.Owner.id)
            .where(vet_models.Owner.user_id == user_id)
            .options(*RECORD_DETAIL_OPTIONS)
            .execution_options(populate_existing=True)
            .order_by(vet_models.Record.attended_at.desc(), vet_models.Record.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await db.execute(statement)
        return result.scalars().all()


record = CRUDRecord()
