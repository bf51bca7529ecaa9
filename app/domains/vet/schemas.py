# app/domains/vet/schemas.py

"""
Schemas de entrada/saída do domínio 'vet' (tutores, animais, prontuários).
"""

from typing import Optional, List
from datetime import date, datetime

from pydantic import EmailStr, Field

from app.core.schemas import ApiModel, PartialUpdateModel


# =============================================================================
# 1. Tutor (Owner)
# =============================================================================
class OwnerBase(ApiModel):
    name: str = Field(..., min_length=1, max_length=120)
    phone: str = Field(..., min_length=1, max_length=30)
    email: Optional[EmailStr] = None
    street: Optional[str] = Field(None, max_length=255)
    number: Optional[str] = Field(None, max_length=20)
    complement: Optional[str] = Field(None, max_length=120)
    neighborhood: Optional[str] = Field(None, max_length=120)
    city: Optional[str] = Field(None, max_length=120)
    state: Optional[str] = Field(None, max_length=60)
    zip_code: Optional[str] = Field(None, max_length=20)


class OwnerCreate(OwnerBase):
    pass


class OwnerUpdate(PartialUpdateModel):
    required_fields = ("name", "phone")

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None
    street: Optional[str] = Field(None, max_length=255)
    number: Optional[str] = Field(None, max_length=20)
    complement: Optional[str] = Field(None, max_length=120)
    neighborhood: Optional[str] = Field(None, max_length=120)
    city: Optional[str] = Field(None, max_length=120)
    state: Optional[str] = Field(None, max_length=60)
    zip_code: Optional[str] = Field(None, max_length=20)


class OwnerRead(OwnerBase):
    # Cadastros antigos podem ter email fora do formato; a saída não revalida.
    email: Optional[str] = None
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


# =============================================================================
# 2. Animal
# =============================================================================
class AnimalBase(ApiModel):
    name: str = Field(..., min_length=1, max_length=120)
    species: str = Field(..., min_length=1, max_length=60)
    breed: Optional[str] = Field(None, max_length=120)
    birth_date: Optional[date] = None


class AnimalCreate(AnimalBase):
    owner_id: int


class AnimalUpdate(PartialUpdateModel):
    required_fields = ("name", "species")

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    species: Optional[str] = Field(None, min_length=1, max_length=60)
    breed: Optional[str] = Field(None, max_length=120)
    birth_date: Optional[date] = None


class AnimalRead(AnimalBase):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime


class AnimalReadWithOwner(AnimalRead):
    owner: OwnerRead


# =============================================================================
# 3. Prontuário (Record)
# =============================================================================
class RecordBase(ApiModel):
    weight: float = Field(..., gt=0, description="Peso em kg")
    medications: str
    dosage: str
    notes: str


class RecordCreate(RecordBase):
    attended_at: Optional[datetime] = Field(None, description="Padrão: momento da criação")
    animal_id: int


class RecordUpdate(PartialUpdateModel):
    required_fields = ("weight", "medications", "dosage", "notes", "attended_at", "animal_id")

    weight: Optional[float] = Field(None, gt=0)
    medications: Optional[str] = None
    dosage: Optional[str] = None
    notes: Optional[str] = None
    attended_at: Optional[datetime] = None
    animal_id: Optional[int] = None


class RecordRead(RecordBase):
    id: int
    attended_at: datetime
    animal_id: int
    created_at: datetime
    updated_at: datetime


class RecordReadWithDetails(RecordRead):
    """Prontuário com o animal e o tutor (listagem e detalhe)."""
    animal: AnimalReadWithOwner


# =============================================================================
# 4. Respostas simples
# =============================================================================
class Message(ApiModel):
    message: str


__all__: List[str] = [
    "OwnerCreate", "OwnerUpdate", "OwnerRead",
    "AnimalCreate", "AnimalUpdate", "AnimalRead", "AnimalReadWithOwner",
    "RecordCreate", "RecordUpdate", "RecordRead", "RecordReadWithDetails",
    "Message",
]
