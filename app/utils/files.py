# app/utils/files.py

from fastapi import UploadFile

from app.core.exceptions import ValidationError

# Tamanho de cada leitura do arquivo enviado.
CHUNK_SIZE = 64 * 1024


def is_image_upload(upload_file: UploadFile) -> bool:
    """Aceita qualquer tipo MIME `image/*` declarado pelo cliente."""
    return (upload_file.content_type or "").lower().startswith("image/")


async def read_upload_file(upload_file: UploadFile, max_bytes: int, *, too_large_message: str) -> bytes:
    """
    Lê o arquivo enviado em blocos, interrompendo assim que `max_bytes` é
    ultrapassado.

    Args:
        upload_file (UploadFile): arquivo recebido pelo FastAPI
        max_bytes (int): tamanho máximo aceito (inclusive)
        too_large_message (str): mensagem do ValidationError quando excede

    Returns:
        bytes: conteúdo completo do arquivo
    """
    buffer = bytearray()
    try:
        while True:
            chunk = await upload_file.read(CHUNK_SIZE)
            if not chunk:
                break
            buffer.extend(chunk)
            if len(buffer) > max_bytes:
                raise ValidationError(too_large_message)
    finally:
        await upload_file.close()
    return bytes(buffer)
