# tests/test_storage_service.py

"""
Testes do cliente Cloudinary com o SDK substituído por funções locais.
"""

import time

import pytest
import cloudinary.uploader

from app.core.exceptions import UploadError
from app.services.storage_service import CloudinaryImageStorage


@pytest.fixture
def storage() -> CloudinaryImageStorage:
    return CloudinaryImageStorage("vetly", "key", "secret", timeout=0.2)


@pytest.mark.asyncio
async def test_upload_passes_timeout_to_sdk(storage: CloudinaryImageStorage, monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append(options)
        return {"secure_url": "https://res.cloudinary.com/vetly/image/upload/users/1.png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

    url = await storage.upload_image(b"png", folder="users", filename="foto.png")
    assert url == "https://res.cloudinary.com/vetly/image/upload/users/1.png"
    assert calls == [{"folder": "users", "resource_type": "image", "timeout": 0.2}]


@pytest.mark.asyncio
async def test_upload_timeout_raises_upload_error(storage: CloudinaryImageStorage, monkeypatch):
    def slow_upload(file, **options):
        time.sleep(0.5)
        return {"secure_url": "https://res.cloudinary.com/vetly/image/upload/users/1.png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", slow_upload)

    with pytest.raises(UploadError, match="Tempo esgotado"):
        await storage.upload_image(b"png", folder="users")


@pytest.mark.asyncio
async def test_upload_without_secure_url(storage: CloudinaryImageStorage, monkeypatch):
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda file, **options: {})

    with pytest.raises(UploadError):
        await storage.upload_image(b"png", folder="users")
