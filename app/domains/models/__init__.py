# app/domains/models/__init__.py

"""
Importa os modelos de todos os domínios em um só lugar, garantindo que o
SQLModel.metadata conheça todas as tabelas antes do create_all.
"""

# usr (User)
from app.domains.usr.models import User

# vet (Owner, Animal, Record)
from app.domains.vet.models import Owner, Animal, Record

__all__ = ["User", "Owner", "Animal", "Record"]
