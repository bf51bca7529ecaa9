# app/__init__.py

"""
Pacote principal da API Vetly.

- `main.py`: instância do FastAPI, middlewares, handlers de erro e routers.
- `core`: configuração, banco de dados, segurança e bases comuns.
- `domains`: um subpacote por domínio (usr, vet, rpt).
- `services`: integrações externas (armazenamento de imagens).
"""

APP_NAME = "Vetly API"
APP_VERSION = "0.1.0"

__version__ = APP_VERSION
__title__ = APP_NAME
__all__ = []
