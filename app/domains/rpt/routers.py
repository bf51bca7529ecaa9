# app/domains/rpt/routers.py

import logging
from typing import AsyncIterator
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.exceptions import InternalError
from app.domains.vet import crud as vet_crud
from app.domains.vet import models as vet_models
from app.domains.vet import services as vet_services
from . import services as rpt_services

logger = logging.getLogger(__name__)

# Tamanho de cada bloco enviado ao cliente.
PDF_CHUNK_SIZE = 32 * 1024

router = APIRouter(
    tags=["Relatórios"],
    responses={404: {"description": "Prontuário não encontrado"}},
)


async def _iter_pdf(content: bytes, record_id: int) -> AsyncIterator[bytes]:
    try:
        for start in range(0, len(content), PDF_CHUNK_SIZE):
            yield content[start:start + PDF_CHUNK_SIZE]
    except BaseException:
        # Os cabeçalhos já foram enviados; resta registrar a interrupção.
        logger.exception("Envio do PDF do prontuário %s interrompido", record_id)
        raise


@router.get(
    "/records/{record_id}/pdf",
    response_class=StreamingResponse,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Baixar prontuário em PDF",
)
async def download_record_pdf(
    record_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    """
    Gera o PDF do prontuário. Prontuário de outro usuário responde 404,
    igual a um inexistente.
    """
    db_record = await vet_services.get_owned_or_raise(
        db, vet_models.Record, record_id, current_user_id,
        options=vet_crud.RECORD_DETAIL_OPTIONS,
        hide_forbidden=True,
    )

    # Nada foi enviado ainda: falhas aqui viram uma resposta JSON 500 normal.
    try:
        content = await run_in_threadpool(rpt_services.render_record_pdf, db_record)
    except Exception as e:
        logger.exception("Erro ao gerar o PDF do prontuário %s", record_id)
        raise InternalError(f"Erro ao gerar PDF: {e}") from e
    filename = rpt_services.build_filename(db_record)
    logger.info("PDF do prontuário %s gerado (%d bytes)", record_id, len(content))

    headers = {
        "Content-Disposition": (
            f'attachment; filename="{rpt_services.ascii_filename(filename)}"; '
            f"filename*=UTF-8''{quote(filename)}"
        ),
        "Content-Length": str(len(content)),
    }
    return StreamingResponse(_iter_pdf(content, record_id), media_type="application/pdf", headers=headers)
