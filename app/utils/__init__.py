# app/utils/__init__.py

"""
Utilitários genéricos, sem regra de negócio de nenhum domínio.

- `files.py`: leitura limitada de uploads e checagem de tipo de imagem.
"""

# flake8: noqa
from . import files

__all__ = ["files"]
