# app/core/database.py

"""
Conexão com o banco de dados e gerenciamento de sessões.

- `Database` agrupa o engine assíncrono e a fábrica de sessões. É criado no
  lifespan da aplicação (startup), guardado em `app.state.database` e
  liberado no shutdown; não existe engine global no nível do módulo.
- `get_session` é a dependência do FastAPI que entrega uma sessão por requisição.
"""

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import Settings

# Todos os modelos precisam estar registrados no SQLModel.metadata
# antes do create_all e da configuração dos mappers.
from app.domains import models  # noqa: F401

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Handle explícito do banco: engine + fábrica de sessões."""

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs):
        if url.startswith("postgresql"):
            # Pool dimensionado para PostgreSQL; SQLite usa o pool padrão.
            engine_kwargs.setdefault("pool_recycle", 3600)
            engine_kwargs.setdefault("pool_size", 10)
            engine_kwargs.setdefault("max_overflow", 20)
            engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True, **engine_kwargs)
        if url.startswith("sqlite"):
            # SQLite só aplica FKs (e o ON DELETE CASCADE) com o pragma ligado por conexão.
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL.get_secret_value(), echo=settings.DEBUG_MODE)

    async def create_all(self) -> None:
        """Cria as tabelas que ainda não existem. Não remove nada."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Tabelas verificadas/criadas")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Pool de conexões encerrado")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Sessão independente para scripts e tarefas fora do ciclo de requisição.
        Faz commit ao final ou rollback em caso de erro.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


# =============================================================================
# Dependência de sessão por requisição
# =============================================================================
async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Entrega uma sessão nova a cada requisição e a fecha ao final.
    O `Database` vem de `app.state`, configurado no lifespan.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
