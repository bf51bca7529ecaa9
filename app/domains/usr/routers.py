# app/domains/usr/routers.py

"""
Endpoints do domínio 'usr': cadastro, login e gerenciamento da própria conta.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.exceptions import InvalidCredentialsError
from app.services.storage_service import ImageStorage

from . import crud as usr_crud
from . import schemas as usr_schemas
from . import services as usr_services


router = APIRouter(
    responses={404: {"description": "Não encontrado"}},
)


# =============================================================================
# 1. Autenticação
# =============================================================================
@router.post("/login", response_model=usr_schemas.LoginResponse, tags=["Autenticação"], summary="Obter token de acesso")
async def login(
    login_in: usr_schemas.LoginRequest,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    Confere email e senha e devolve um JWT válido por 24h.
    A mensagem de erro é a mesma para email desconhecido e senha errada.
    """
    db_user = await usr_crud.user.authenticate(db, email=login_in.email, password=login_in.password)
    if db_user is None:
        raise InvalidCredentialsError()

    token = deps.create_access_token(user_id=db_user.id, email=db_user.email)
    return {"token": token, "user": db_user}


# =============================================================================
# 2. Usuários
# =============================================================================
@router.post("/users", response_model=usr_schemas.UserRead, status_code=status.HTTP_201_CREATED, tags=["Usuários"], summary="Cadastrar usuário")
async def create_user(
    user_in: usr_schemas.UserCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    return await usr_crud.user.create(db, obj_in=user_in)


@router.get("/users", response_model=List[usr_schemas.UserRead], tags=["Usuários"], summary="Listar usuários")
async def read_users(
    db: AsyncSession = Depends(deps.get_db_session),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await usr_crud.user.get_multi(db, skip=skip, limit=limit)


@router.get("/users/{user_id}", response_model=usr_schemas.UserRead, tags=["Usuários"], summary="Consultar usuário")
async def read_user(
    user_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await usr_crud.user.get_or_404(db, id=user_id)


@router.put("/users/{user_id}", response_model=usr_schemas.UserRead, tags=["Usuários"], summary="Atualizar usuário")
async def update_user(
    user_id: int,
    user_in: usr_schemas.UserUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    db_user = await usr_services.get_self_or_raise(db, user_id, current_user_id, action="alterar")
    return await usr_crud.user.update(db, db_obj=db_user, obj_in=user_in)


@router.delete("/users/{user_id}", response_model=usr_schemas.Message, tags=["Usuários"], summary="Excluir usuário")
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    """Exclui a conta e, em cascata, tutores, animais e prontuários."""
    await usr_services.get_self_or_raise(db, user_id, current_user_id, action="excluir")
    await usr_crud.user.remove(db, id=user_id)
    return {"message": "O usuário foi excluído com sucesso"}


@router.post("/users/{user_id}/image", response_model=usr_schemas.UserRead, tags=["Usuários"], summary="Enviar foto do usuário")
async def upload_user_image(
    user_id: int,
    image: Optional[UploadFile] = File(None, description="Arquivo de imagem (até 5MB)"),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ImageStorage = Depends(deps.get_image_storage),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    return await usr_services.upload_user_image(
        db, storage,
        user_id=user_id,
        current_user_id=current_user_id,
        upload_file=image,
    )
