# flake8: noqa
# scripts/create_user.py

import asyncio
import typer
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.database import Database
from app.core.exceptions import ConflictError
from app.domains.usr import crud as usr_crud
from app.domains.usr import schemas as usr_schemas

cli = typer.Typer(help="Utilitários de linha de comando da API Vetly.")


async def _init_db() -> None:
    database = Database.from_settings(settings)
    try:
        await database.create_all()
    finally:
        await database.dispose()


async def _create_user(user_in: usr_schemas.UserCreate) -> None:
    database = Database.from_settings(settings)
    try:
        await database.create_all()
        async with database.session() as db:
            db_user = await usr_crud.user.create(db, obj_in=user_in)
            print(f"Usuário criado com sucesso: {db_user.email} (id={db_user.id})")
    finally:
        await database.dispose()


@cli.command("init-db")
def init_db():
    """
    Cria as tabelas que ainda não existem no banco configurado em DATABASE_URL.
    """
    asyncio.run(_init_db())
    print("Tabelas criadas/verificadas.")


@cli.command("create-user")
def create_user(
    email: str = typer.Option(
        ..., '--email', '-e',
        prompt="Email do usuário",
        help="Email usado no login."
    ),
    name: str = typer.Option(
        ..., '--name', '-n',
        prompt="Nome do usuário",
        help="Nome de exibição."
    ),
    password: str = typer.Option(
        ..., '--password', '-p',
        prompt="Senha",
        hide_input=True,
        confirmation_prompt=True,
        help="Senha do usuário (mínimo de 8 caracteres)."
    ),
):
    """
    Cadastra um usuário diretamente no banco, sem passar pela API.
    """
    try:
        user_in = usr_schemas.UserCreate(name=name, email=email, password=password)
    except PydanticValidationError as e:
        for error in e.errors():
            print(f"Erro em '{'.'.join(str(p) for p in error['loc'])}': {error['msg']}")
        raise typer.Exit(code=1)

    try:
        asyncio.run(_create_user(user_in))
    except ConflictError as e:
        print(f"Erro: {e.message}: {email}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
