# app/domains/usr/__init__.py

"""
Domínio 'usr': usuários do sistema e autenticação.

- `models.py`: tabela `users` e o mixin de timestamps comum.
- `schemas.py`: payloads de cadastro, login e atualização.
- `crud.py`: acesso a dados, hash de senha e autenticação.
- `services.py`: regra de "somente a própria conta" e upload da foto.
- `routers.py`: endpoints /login e /users.
"""

__all__ = []
