# app/domains/vet/models.py

"""
Modelos ORM do domínio 'vet': tutores (Owner), animais (Animal) e
prontuários de atendimento (Record).

Cadeia de propriedade: Record -> Animal -> Owner -> User. Todas as FKs usam
ON DELETE CASCADE e os relacionamentos pai -> filho usam cascade no ORM.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import date, datetime, UTC
from sqlmodel import Field, Relationship
from sqlalchemy import Text
from sqlalchemy.types import TIMESTAMP

from app.domains.usr.models import TimestampMixin

if TYPE_CHECKING:
    from app.domains.usr.models import User


# =============================================================================
# 1. owners (tutores)
# =============================================================================
class Owner(TimestampMixin, table=True):
    __tablename__ = "owners"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=120, description="Nome do tutor")
    phone: str = Field(max_length=30, description="Telefone de contato")
    email: Optional[str] = Field(default=None, max_length=255)
    street: Optional[str] = Field(default=None, max_length=255)
    number: Optional[str] = Field(default=None, max_length=20)
    complement: Optional[str] = Field(default=None, max_length=120)
    neighborhood: Optional[str] = Field(default=None, max_length=120)
    city: Optional[str] = Field(default=None, max_length=120)
    state: Optional[str] = Field(default=None, max_length=60)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True, description="Usuário dono do cadastro")

    user: Optional["User"] = Relationship(back_populates="owners")
    animals: List["Animal"] = Relationship(
        back_populates="owner",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


# =============================================================================
# 2. animals
# =============================================================================
class Animal(TimestampMixin, table=True):
    __tablename__ = "animals"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=120)
    species: str = Field(max_length=60)
    breed: Optional[str] = Field(default=None, max_length=120)
    birth_date: Optional[date] = Field(default=None, description="Nunca posterior à data atual")
    owner_id: int = Field(foreign_key="owners.id", ondelete="CASCADE", index=True)

    owner: Optional[Owner] = Relationship(back_populates="animals")
    records: List["Record"] = Relationship(
        back_populates="animal",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


# =============================================================================
# 3. records (prontuários)
# =============================================================================
class Record(TimestampMixin, table=True):
    __tablename__ = "records"

    id: Optional[int] = Field(default=None, primary_key=True)
    weight: float = Field(description="Peso em kg")
    medications: str = Field(sa_type=Text)
    dosage: str = Field(sa_type=Text)
    notes: str = Field(sa_type=Text, description="Observações livres do atendimento")
    attended_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=TIMESTAMP(timezone=True),
        index=True,
    )
    animal_id: int = Field(foreign_key="animals.id", ondelete="CASCADE", index=True)

    animal: Optional[Animal] = Relationship(back_populates="records")
