# app/domains/__init__.py

"""Domínios de negócio da API. `models` registra todas as tabelas."""
