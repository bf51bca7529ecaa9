# app/domains/usr/schemas.py

"""
Schemas de entrada/saída do domínio 'usr' (usuários e autenticação).
"""

from typing import Optional, List
from datetime import datetime

from pydantic import EmailStr, Field

from app.core.schemas import ApiModel, PartialUpdateModel


# =============================================================================
# 1. Usuário (User)
# =============================================================================
class UserBase(ApiModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr = Field(..., max_length=255)


class UserCreate(UserBase):
    """Cadastro (rota pública)."""
    password: str = Field(..., min_length=8, max_length=128)


class UserUpdate(PartialUpdateModel):
    """Somente nome e email podem ser alterados por aqui."""
    required_fields = ("name", "email")

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    email: Optional[EmailStr] = Field(None, max_length=255)


class UserRead(ApiModel):
    """
    Dados públicos do usuário. O hash da senha nunca é serializado.
    """
    id: int
    name: str
    email: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserSummary(ApiModel):
    id: int
    name: str
    email: str


# =============================================================================
# 2. Autenticação
# =============================================================================
class LoginRequest(ApiModel):
    email: str
    password: str


class LoginResponse(ApiModel):
    token: str
    user: UserSummary


class Message(ApiModel):
    message: str


__all__: List[str] = [
    "UserCreate", "UserUpdate", "UserRead", "UserSummary",
    "LoginRequest", "LoginResponse", "Message",
]
