# app/domains/vet/services.py

"""
Regras de negócio do domínio 'vet'.

`get_owned_or_raise` é o predicado único de autorização pela cadeia de
propriedade (Record -> Animal -> Owner -> User). Cada tipo de entidade
declara em `OWNERSHIP_CHAINS` os joins necessários para chegar ao Owner; a
consulta resolve a entidade e o `user_id` do dono em um único SELECT.
"""

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo
from typing import Optional, Sequence, Type, TypeVar

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from . import models as vet_models

logger = logging.getLogger(__name__)

OwnedModel = TypeVar("OwnedModel", vet_models.Owner, vet_models.Animal, vet_models.Record)

Owner, Animal, Record = vet_models.Owner, vet_models.Animal, vet_models.Record

# Joins da entidade até o Owner, em ordem.
OWNERSHIP_CHAINS = {
    Owner: (),
    Animal: (
        (Owner, Animal.owner_id == Owner.id),
    ),
    Record: (
        (Animal, Record.animal_id == Animal.id),
        (Owner, Animal.owner_id == Owner.id),
    ),
}

NOT_FOUND_MESSAGES = {
    Owner: "Dono não encontrado",
    Animal: "Animal não encontrado",
    Record: "Prontuário não encontrado",
}

FORBIDDEN_MESSAGES = {
    Owner: "Você não tem permissão para acessar este tutor",
    Animal: "Você não tem permissão para acessar este animal",
    Record: "Você não tem permissão para acessar este prontuário",
}


async def get_owned_or_raise(
    db: AsyncSession,
    model: Type[OwnedModel],
    obj_id: int,
    user_id: int,
    *,
    options: Sequence = (),
    forbidden_message: Optional[str] = None,
    hide_forbidden: bool = False,
) -> OwnedModel:
    """
    Carrega `model` pelo id e confirma que a cadeia de propriedade termina
    no usuário `user_id`.

    - inexistente: NotFoundError (404)
    - de outro usuário: ForbiddenError (403), ou NotFoundError quando
      `hide_forbidden` (usado pelo PDF, que não revela a existência do registro)
    """
    statement = select(model, Owner.user_id).where(model.id == obj_id)
    for target, onclause in OWNERSHIP_CHAINS[model]:
        statement = statement.join(target, onclause)
    if options:
        statement = statement.options(*options).execution_options(populate_existing=True)

    row = (await db.execute(statement)).first()
    if row is None:
        raise NotFoundError(NOT_FOUND_MESSAGES[model])

    obj, owner_user_id = row
    if owner_user_id != user_id:
        logger.warning(
            "Acesso negado: usuário %s tentou acessar %s %s do usuário %s",
            user_id, model.__name__, obj_id, owner_user_id,
        )
        if hide_forbidden:
            raise NotFoundError(NOT_FOUND_MESSAGES[model])
        raise ForbiddenError(forbidden_message or FORBIDDEN_MESSAGES[model])
    return obj


def clinic_today() -> date:
    """Data de hoje no fuso da clínica (`REPORT_TIMEZONE`), não no do servidor."""
    return datetime.now(ZoneInfo(settings.REPORT_TIMEZONE)).date()


def ensure_birth_date_not_in_future(birth_date: Optional[date], *, today: Optional[date] = None) -> None:
    """Data de nascimento igual a hoje é aceita; posterior a hoje, não."""
    if birth_date is None:
        return
    if birth_date > (today or clinic_today()):
        raise ValidationError("A data de nascimento não pode ser uma data futura")
