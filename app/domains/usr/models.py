# app/domains/usr/models.py

"""
Modelos ORM do domínio 'usr' (usuários do sistema).

Um usuário é dono de zero ou mais tutores (Owner). A exclusão de um usuário
remove em cascata os tutores, e por consequência os animais e prontuários,
tanto pelo relacionamento do ORM quanto pelo ON DELETE CASCADE das FKs.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

if TYPE_CHECKING:
    from app.domains.vet.models import Owner


class TimestampMixin(SQLModel):
    """Colunas created_at/updated_at comuns a todas as tabelas."""
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={"server_default": func.now()},
        description="Data de criação do registro"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={"server_default": func.now(), "onupdate": func.now()},
        description="Data da última atualização do registro"
    )


# =============================================================================
# users
# =============================================================================
class User(TimestampMixin, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=120, description="Nome de exibição")
    email: str = Field(max_length=255, unique=True, index=True, description="Email de login")
    password_hash: str = Field(max_length=255, description="Senha com hash bcrypt")
    image_url: Optional[str] = Field(default=None, max_length=1024, description="URL segura da foto no Cloudinary")

    owners: List["Owner"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    @classmethod
    def create(cls, name: str, email: str, hashed_password: str) -> "User":
        return cls(name=name, email=email, password_hash=hashed_password)
