# app/domains/vet/routers.py

"""
Endpoints do domínio 'vet': /owners, /animals e /records.

Todos exigem token. Leituras, atualizações e exclusões de um registro
específico passam por `services.get_owned_or_raise`; listagens são
filtradas pelo usuário autenticado.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from . import crud as vet_crud
from . import models as vet_models
from . import schemas as vet_schemas
from . import services as vet_services


router = APIRouter(
    responses={
        401: {"description": "Token ausente ou inválido"},
        403: {"description": "Registro de outro usuário"},
        404: {"description": "Não encontrado"},
    },
)


# =============================================================================
# 1. Tutores (Owner)
# =============================================================================
@router.get("/owners", response_model=List[vet_schemas.OwnerRead], tags=["Tutores"], summary="Listar tutores")
async def read_owners(
    db: AsyncSession = Depends(deps.get_db_session),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await vet_crud.owner.get_multi_by_user(db, user_id=current_user_id, skip=skip, limit=limit)


@router.post("/owners", response_model=vet_schemas.OwnerRead, status_code=status.HTTP_201_CREATED, tags=["Tutores"], summary="Cadastrar tutor")
async def create_owner(
    owner_in: vet_schemas.OwnerCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await vet_crud.owner.create_for_user(db, obj_in=owner_in, user_id=current_user_id)


@router.get("/owners/{owner_id}", response_model=vet_schemas.OwnerRead, tags=["Tutores"], summary="Consultar tutor")
async def read_owner(
    owner_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await vet_services.get_owned_or_raise(db, vet_models.Owner, owner_id, current_user_id)


@router.patch("/owners/{owner_id}", response_model=vet_schemas.OwnerRead, tags=["Tutores"], summary="Atualizar tutor")
async def update_owner(
    owner_id: int,
    owner_in: vet_schemas.OwnerUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    db_owner = await vet_services.get_owned_or_raise(db, vet_models.Owner, owner_id, current_user_id)
    return await vet_crud.owner.update(db, db_obj=db_owner, obj_in=owner_in)


@router.delete("/owners/{owner_id}", response_model=vet_schemas.Message, tags=["Tutores"], summary="Excluir tutor")
async def delete_owner(
    owner_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    """Remove o tutor junto com seus animais e prontuários."""
    await vet_services.get_owned_or_raise(db, vet_models.Owner, owner_id, current_user_id)
    await vet_crud.owner.delete(db, id=owner_id)
    return {"message": "Dono excluído com sucesso"}


# =============================================================================
# 2. Animais
# =============================================================================
@router.get("/animals", response_model=List[vet_schemas.AnimalRead], tags=["Animais"], summary="Listar animais")
async def read_animals(
    db: AsyncSession = Depends(deps.get_db_session),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await vet_crud.animal.get_multi_by_user(db, user_id=current_user_id, skip=skip, limit=limit)


@router.post("/animals", response_model=vet_schemas.AnimalRead, status_code=status.HTTP_201_CREATED, tags=["Animais"], summary="Cadastrar animal")
async def create_animal(
    animal_in: vet_schemas.AnimalCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    vet_services.ensure_birth_date_not_in_future(animal_in.birth_date)
    await vet_services.get_owned_or_raise(
        db, vet_models.Owner, animal_in.owner_id, current_user_id,
        forbidden_message="Você não tem permissão para criar um animal para este tutor",
    )
    return await vet_crud.animal.create(db, obj_in=animal_in)


@router.get("/animals/{animal_id}", response_model=vet_schemas.AnimalRead, tags=["Animais"], summary="Consultar animal")
async def read_animal(
    animal_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await vet_services.get_owned_or_raise(db, vet_models.Animal, animal_id, current_user_id)


@router.patch("/animals/{animal_id}", response_model=vet_schemas.AnimalRead, tags=["Animais"], summary="Atualizar animal")
async def update_animal(
    animal_id: int,
    animal_in: vet_schemas.AnimalUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    db_animal = await vet_services.get_owned_or_raise(db, vet_models.Animal, animal_id, current_user_id)
    vet_services.ensure_birth_date_not_in_future(animal_in.birth_date)
    return await vet_crud.animal.update(db, db_obj=db_animal, obj_in=animal_in)


@router.delete("/animals/{animal_id}", response_model=vet_schemas.Message, tags=["Animais"], summary="Excluir animal")
async def delete_animal(
    animal_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    await vet_services.get_owned_or_raise(db, vet_models.Animal, animal_id, current_user_id)
    await vet_crud.animal.delete(db, id=animal_id)
    return {"message": "Animal excluído com sucesso"}


# =============================================================================
# 3. Prontuários
# =============================================================================
@router.get("/records", response_model=List[vet_schemas.RecordReadWithDetails], tags=["Prontuários"], summary="Listar prontuários")
async def read_records(
    db: AsyncSession = Depends(deps.get_db_session),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await vet_crud.record.get_multi_by_user(db, user_id=current_user_id, skip=skip, limit=limit)


@router.post("/records", response_model=vet_schemas.RecordRead, status_code=status.HTTP_201_CREATED, tags=["Prontuários"], summary="Registrar atendimento")
async def create_record(
    record_in: vet_schemas.RecordCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    await vet_services.get_owned_or_raise(
        db, vet_models.Animal, record_in.animal_id, current_user_id,
        forbidden_message="Você não tem permissão para registrar atendimentos deste animal",
    )
    return await vet_crud.record.create(db, obj_in=record_in)


@router.get("/records/{record_id}", response_model=vet_schemas.RecordReadWithDetails, tags=["Prontuários"], summary="Consultar prontuário")
async def read_record(
    record_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await vet_services.get_owned_or_raise(
        db, vet_models.Record, record_id, current_user_id,
        options=vet_crud.RECORD_DETAIL_OPTIONS,
    )


@router.patch("/records/{record_id}", response_model=vet_schemas.RecordRead, tags=["Prontuários"], summary="Atualizar prontuário")
async def update_record(
    record_id: int,
    record_in: vet_schemas.RecordUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    db_record = await vet_services.get_owned_or_raise(db, vet_models.Record, record_id, current_user_id)
    # Mover o prontuário para outro animal exige posse do animal de destino.
    if "animal_id" in record_in.model_fields_set and record_in.animal_id != db_record.animal_id:
        await vet_services.get_owned_or_raise(
            db, vet_models.Animal, record_in.animal_id, current_user_id,
            forbidden_message="Você não tem permissão para registrar atendimentos deste animal",
        )
    return await vet_crud.record.update(db, db_obj=db_record, obj_in=record_in)


@router.delete("/records/{record_id}", response_model=vet_schemas.Message, tags=["Prontuários"], summary="Excluir prontuário")
async def delete_record(
    record_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    await vet_services.get_owned_or_raise(db, vet_models.Record, record_id, current_user_id)
    await vet_crud.record.delete(db, id=record_id)
    return {"message": "Registro excluído com sucesso"}
