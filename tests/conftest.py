# tests/conftest.py

import os
from typing import AsyncGenerator, Awaitable, Callable, Optional
from contextlib import asynccontextmanager

# As configurações são lidas na importação de app.*; o ambiente de teste
# precisa estar definido antes disso.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-vetly")
os.environ["APP_ENV"] = "testing"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_CREATE_TABLES"] = "false"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.main import app as main_app
from app.core import dependencies as deps
from app.core.database import Database
from app.core.exceptions import UploadError
from app.core.security import get_password_hash
from app.services.storage_service import ImageStorage

from app.domains.usr import models as usr_models
from app.domains.vet import models as vet_models


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "senha-segura-123"


# --- Armazenamento de imagens falso ---
class FakeImageStorage(ImageStorage):
    """Registra os envios em memória; `fail=True` simula falha do provedor."""

    def __init__(self):
        self.uploads: list[dict] = []
        self.fail = False

    async def upload_image(self, data: bytes, *, folder: str, filename: Optional[str] = None) -> str:
        if self.fail:
            raise UploadError("Falha ao enviar a imagem: provedor indisponível")
        self.uploads.append({"size": len(data), "folder": folder, "filename": filename})
        return f"https://res.cloudinary.com/vetly/image/upload/{folder}/{len(self.uploads)}.png"


# --- Banco de dados ---
@pytest_asyncio.fixture(scope="function")
async def test_database() -> AsyncGenerator[Database, None]:
    """
    Banco SQLite em memória, recriado a cada teste.
    StaticPool mantém uma única conexão, para que todas as sessões vejam as mesmas tabelas.
    """
    database = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await database.create_all()
    yield database
    async with database.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await database.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with test_database.session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def fake_storage() -> FakeImageStorage:
    return FakeImageStorage()


# --- Fábricas de dados ---
@pytest_asyncio.fixture(scope="function")
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[usr_models.User]]:
    """
    Cria usuários direto no banco, com a senha já em hash.
    """
    async def _create_user(name: str, email: str, password: str = TEST_PASSWORD, **kwargs) -> usr_models.User:
        user = usr_models.User(name=name, email=email, password_hash=get_password_hash(password), **kwargs)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _create_user


@pytest_asyncio.fixture(scope="function")
async def test_user(user_factory: Callable) -> usr_models.User:
    return await user_factory("Dra. Ana Souza", "ana@vetly.com")


@pytest_asyncio.fixture(scope="function")
async def other_user(user_factory: Callable) -> usr_models.User:
    return await user_factory("Dr. Bruno Lima", "bruno@vetly.com")


@pytest_asyncio.fixture(scope="function")
def owner_factory(db_session: AsyncSession) -> Callable[..., Awaitable[vet_models.Owner]]:
    async def _create_owner(user: usr_models.User, name: str = "Carla Mendes", **kwargs) -> vet_models.Owner:
        data = {"phone": "(11) 98888-7777", **kwargs}
        owner = vet_models.Owner(name=name, user_id=user.id, **data)
        db_session.add(owner)
        await db_session.commit()
        await db_session.refresh(owner)
        return owner
    return _create_owner


@pytest_asyncio.fixture(scope="function")
def animal_factory(db_session: AsyncSession) -> Callable[..., Awaitable[vet_models.Animal]]:
    async def _create_animal(owner: vet_models.Owner, name: str = "Rex", **kwargs) -> vet_models.Animal:
        data = {"species": "Cachorro", **kwargs}
        animal = vet_models.Animal(name=name, owner_id=owner.id, **data)
        db_session.add(animal)
        await db_session.commit()
        await db_session.refresh(animal)
        return animal
    return _create_animal


@pytest_asyncio.fixture(scope="function")
def record_factory(db_session: AsyncSession) -> Callable[..., Awaitable[vet_models.Record]]:
    async def _create_record(animal: vet_models.Animal, **kwargs) -> vet_models.Record:
        data = {
            "weight": 12.5,
            "medications": "Vermífugo",
            "dosage": "1 comprimido",
            "notes": "Animal saudável.",
            **kwargs,
        }
        record = vet_models.Record(animal_id=animal.id, **data)
        db_session.add(record)
        await db_session.commit()
        await db_session.refresh(record)
        return record
    return _create_record


# --- Clientes HTTP ---
@asynccontextmanager
async def _override_dependencies(db_session: AsyncSession, storage: ImageStorage):
    async def override_get_session():
        yield db_session

    def override_get_image_storage():
        return storage

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides.update({
            deps.get_db_session: override_get_session,
            deps.get_image_storage: override_get_image_storage,
        })
        yield
    finally:
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession, fake_storage: FakeImageStorage) -> AsyncGenerator[AsyncClient, None]:
    """Cliente sem autenticação."""
    async with _override_dependencies(db_session, fake_storage):
        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest_asyncio.fixture(scope="function")
def authorized_client_factory(
    db_session: AsyncSession,
    fake_storage: FakeImageStorage,
) -> Callable[[usr_models.User, str], AsyncGenerator[AsyncClient, None]]:
    """
    Devolve um context manager que faz login via POST /login com o usuário
    informado e entrega o cliente já com o header Authorization.
    """
    @asynccontextmanager
    async def _create_client_context(user: usr_models.User, password: str = TEST_PASSWORD) -> AsyncGenerator[AsyncClient, None]:
        async with _override_dependencies(db_session, fake_storage):
            transport = ASGITransport(app=main_app)
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                res = await c.post("/login", json={"email": user.email, "password": password})
                if res.status_code != 200:
                    pytest.fail(f"Falha no login de {user.email}: {res.text}")

                c.headers["Authorization"] = f"Bearer {res.json()['token']}"
                yield c

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def authorized_client(
    authorized_client_factory: Callable[..., AsyncGenerator[AsyncClient, None]],
    test_user: usr_models.User,
) -> AsyncGenerator[AsyncClient, None]:
    async with authorized_client_factory(test_user) as c:
        yield c


@pytest_asyncio.fixture(scope="function")
async def other_client(
    authorized_client_factory: Callable[..., AsyncGenerator[AsyncClient, None]],
    other_user: usr_models.User,
) -> AsyncGenerator[AsyncClient, None]:
    async with authorized_client_factory(other_user) as c:
        yield c
