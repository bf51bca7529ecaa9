# app/core/schemas.py

"""
Bases Pydantic comuns aos schemas de todos os domínios.

A API conversa em camelCase (`zipCode`, `birthDate`, ...) enquanto o código
Python usa snake_case; o alias_generator faz a ponte nos dois sentidos.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdateModel(ApiModel):
    """
    Base dos payloads de atualização parcial.

    Um campo ausente do JSON não entra em `model_fields_set` e não é aplicado.
    Um campo enviado é aplicado como veio, inclusive "" e 0. `null` limpa a
    coluna, exceto nas listadas em `required_fields`, que são NOT NULL.
    """
    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_null_on_required(self):
        for name in self.model_fields_set & set(self.required_fields):
            if getattr(self, name) is None:
                raise ValueError(f"O campo '{to_camel(name)}' não pode ser nulo")
        return self
