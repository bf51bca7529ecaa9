# app/domains/rpt/__init__.py

"""
Domínio 'rpt' (Report): geração do prontuário de atendimento em PDF.

- `services.py`: layout e formatação pt-BR do documento (reportlab).
- `routers.py`: GET /records/{id}/pdf.
"""

__all__ = []
