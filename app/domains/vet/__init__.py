# app/domains/vet/__init__.py

"""
Domínio 'vet': tutores (Owner), animais e prontuários de atendimento.

Toda leitura e escrita respeita a cadeia de propriedade
Record -> Animal -> Owner -> User (ver `services.get_owned_or_raise`).
"""

__all__ = []
