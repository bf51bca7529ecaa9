# app/core/__init__.py

"""
Componentes centrais usados por todos os domínios.

- `config.py`: configurações (pydantic-settings).
- `database.py`: engine assíncrono, sessões e criação de tabelas.
- `security.py`: hash de senha, JWT e Access Guard.
- `dependencies.py`: dependências injetadas nos routers.
- `exceptions.py`: hierarquia de erros e handler JSON.
- `crud_base.py` / `schemas.py`: bases genéricas de CRUD e de schemas.
"""

__all__ = []
