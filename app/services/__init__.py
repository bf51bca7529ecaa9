# app/services/__init__.py

"""
Serviços de integração com sistemas externos.

- `storage_service.py`: envio de imagens ao armazenamento em nuvem (Cloudinary).
"""

# flake8: noqa
from .storage_service import ImageStorage, CloudinaryImageStorage

__all__ = ["ImageStorage", "CloudinaryImageStorage"]
