# tests/domains/test_rpt_n.py

"""
Testes do PDF do prontuário (GET /records/{id}/pdf) e da formatação usada nele.
"""

import io
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from httpx import AsyncClient
from pypdf import PdfReader

from app.domains.rpt import services as rpt_services
from app.domains.usr import models as usr_models


def _pdf_text(content: bytes) -> str:
    reader = PdfReader(io.BytesIO(content))
    return "\n".join(page.extract_text() for page in reader.pages)


# =============================================================================
# 1. Endpoint
# =============================================================================
@pytest.mark.asyncio
async def test_download_record_pdf(
    authorized_client: AsyncClient,
    test_user: usr_models.User,
    owner_factory,
    animal_factory,
    record_factory,
):
    owner = await owner_factory(test_user, name="Carla Mendes", phone="11 98888-7777")
    animal = await animal_factory(owner, name="Rex", species="Cachorro", birth_date=date(2020, 3, 15))
    record = await record_factory(animal, weight=12.5, attended_at=datetime(2024, 5, 10, 15, 0))

    response = await authorized_client.get(f"/records/{record.id}/pdf")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"].startswith(
        'attachment; filename="prontuario-Rex-10-05-2024.pdf"'
    )
    assert response.content.startswith(b"%PDF")

    text = _pdf_text(response.content)
    assert "DADOS DO ANIMAL" in text
    assert "DADOS DO TUTOR" in text
    assert "DADOS DO ATENDIMENTO" in text
    assert "Rex" in text
    assert "Carla Mendes" in text
    assert "15/03/2020" in text
    assert "12,5 kg" in text
    assert "10/05/2024 12:00:00" in text
    assert "Vetly - Sistema de Gest" in text


@pytest.mark.asyncio
async def test_pdf_contains_every_field_created_through_api(authorized_client: AsyncClient):
    """Tudo o que foi cadastrado pela API aparece no texto do PDF."""
    owner = await authorized_client.post("/owners", json={
        "name": "Carla Mendes",
        "phone": "(21) 97777-6666",
        "email": "carla.mendes@exemplo.com",
    })
    assert owner.status_code == 201
    animal = await authorized_client.post("/animals", json={
        "name": "Mingau",
        "species": "Gato",
        "breed": "Siames",
        "birthDate": "2019-08-01",
        "ownerId": owner.json()["id"],
    })
    assert animal.status_code == 201
    record = await authorized_client.post("/records", json={
        "weight": 4.3215,
        "medications": "Amoxicilina 250mg",
        "dosage": "Meio comprimido a cada 12h",
        "notes": "Animal ativo e hidratado.\nRetorno em 15 dias.",
        "attendedAt": "2024-05-10T15:00:00Z",
        "animalId": animal.json()["id"],
    })
    assert record.status_code == 201

    response = await authorized_client.get(f"/records/{record.json()['id']}/pdf")
    assert response.status_code == 200
    text = _pdf_text(response.content)

    for expected in (
        "Mingau",
        "Gato",
        "Siames",
        "01/08/2019",
        "Carla Mendes",
        "(21) 97777-6666",
        "carla.mendes@exemplo.com",
        "10/05/2024 12:00:00",
        "4,3215 kg",
        "Amoxicilina 250mg",
        "Meio comprimido a cada 12h",
        "Animal ativo e hidratado.",
        "Retorno em 15 dias.",
    ):
        assert expected in text, expected


@pytest.mark.asyncio
async def test_pdf_defaults_for_missing_optional_fields(
    authorized_client: AsyncClient,
    test_user: usr_models.User,
    owner_factory,
    animal_factory,
    record_factory,
):
    record = await record_factory(await animal_factory(await owner_factory(test_user)))
    response = await authorized_client.get(f"/records/{record.id}/pdf")
    assert response.status_code == 200

    text = _pdf_text(response.content)
    assert "Não informada" in text
    assert "Não informado" in text


@pytest.mark.asyncio
async def test_pdf_of_other_user_is_not_found(
    authorized_client: AsyncClient,
    other_user: usr_models.User,
    owner_factory,
    animal_factory,
    record_factory,
):
    """Prontuário alheio responde igual a um inexistente."""
    foreign = await record_factory(await animal_factory(await owner_factory(other_user)))

    foreign_response = await authorized_client.get(f"/records/{foreign.id}/pdf")
    missing_response = await authorized_client.get("/records/9999/pdf")

    assert foreign_response.status_code == missing_response.status_code == 404
    assert foreign_response.json() == missing_response.json() == {"error": "Prontuário não encontrado"}


@pytest.mark.asyncio
async def test_pdf_requires_token(client: AsyncClient):
    response = await client.get("/records/1/pdf")
    assert response.status_code == 401


# =============================================================================
# 2. Formatação
# =============================================================================
def test_format_weight_uses_decimal_comma():
    assert rpt_services.format_weight(12.5) == "12,5 kg"
    assert rpt_services.format_weight(8.0) == "8 kg"


def test_format_weight_keeps_every_digit():
    assert rpt_services.format_weight(12.3456789) == "12,3456789 kg"
    assert rpt_services.format_weight(1234567.0) == "1234567 kg"
    assert rpt_services.format_weight(0.0000001) == "0,0000001 kg"


def test_naive_datetime_is_treated_as_utc():
    sao_paulo = ZoneInfo("America/Sao_Paulo")
    naive = datetime(2024, 5, 10, 2, 30)
    aware = datetime(2024, 5, 10, 2, 30, tzinfo=timezone.utc)
    assert rpt_services.format_datetime(naive, sao_paulo) == rpt_services.format_datetime(aware, sao_paulo)
    assert rpt_services.format_datetime(naive, sao_paulo) == "09/05/2024 23:30:00"


def test_ascii_filename_strips_accents_and_quotes():
    assert rpt_services.ascii_filename('prontuario-João "Bob"-10-05-2024.pdf') == "prontuario-Joao Bob-10-05-2024.pdf"
