# app/services/storage_service.py

"""
Armazenamento de imagens em nuvem.

`ImageStorage` define o contrato usado pelos serviços de domínio; a
implementação concreta (`CloudinaryImageStorage`) é criada no lifespan e
fica em `app.state.image_storage`. Nos testes ela é substituída por um
fake via `dependency_overrides`.
"""

import asyncio
import io
import logging
from typing import Optional

import cloudinary
import cloudinary.uploader

from app.core.config import Settings
from app.core.exceptions import UploadError

logger = logging.getLogger(__name__)


class ImageStorage:
    """Contrato: envia bytes de imagem para `folder` e devolve a URL pública (https)."""

    async def upload_image(self, data: bytes, *, folder: str, filename: Optional[str] = None) -> str:
        raise NotImplementedError


class CloudinaryImageStorage(ImageStorage):
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, *, timeout: float = 30.0):
        self.timeout = timeout
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret, secure=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryImageStorage":
        return cls(
            settings.CLOUDINARY_CLOUD_NAME,
            settings.CLOUDINARY_API_KEY.get_secret_value(),
            settings.CLOUDINARY_API_SECRET.get_secret_value(),
            timeout=settings.UPLOAD_TIMEOUT_SECONDS,
        )

    def _upload_sync(self, data: bytes, folder: str) -> dict:
        # O timeout do SDK encerra a requisição HTTP junto com o wait_for.
        return cloudinary.uploader.upload(
            io.BytesIO(data), folder=folder, resource_type="image", timeout=self.timeout,
        )

    async def upload_image(self, data: bytes, *, folder: str, filename: Optional[str] = None) -> str:
        # O SDK é bloqueante: roda em thread, com tempo máximo.
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(self._upload_sync, data, folder),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error("Envio ao Cloudinary excedeu %ss (arquivo: %s)", self.timeout, filename)
            raise UploadError("Tempo esgotado ao enviar a imagem")
        except Exception as e:
            logger.exception("Falha no envio ao Cloudinary (arquivo: %s)", filename)
            raise UploadError(f"Falha ao enviar a imagem: {e}")

        secure_url = result.get("secure_url")
        if not secure_url:
            raise UploadError("O serviço de imagens não retornou uma URL")
        logger.info("Imagem enviada para a pasta '%s': %s", folder, secure_url)
        return secure_url
