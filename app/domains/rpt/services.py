# app/domains/rpt/services.py

"""
Geração do PDF do prontuário de atendimento (reportlab).

`render_record_pdf` é síncrona e CPU-bound; o router a executa em thread
separada e só começa a responder depois que os bytes estão prontos.
"""

import io
import unicodedata
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional
from xml.sax.saxutils import escape
from zoneinfo import ZoneInfo

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from app.core.config import settings
from app.domains.vet import models as vet_models

PAGE_MARGIN = 50
ACCENT_HEX = "#4A90E2"
ACCENT_COLOR = colors.HexColor(ACCENT_HEX)
TEXT_COLOR = colors.HexColor("#333333")
FOOTER_COLOR = colors.HexColor("#999999")

FOOTER_TEXT = "Vetly - Sistema de Gestão Veterinária"
NOT_INFORMED_F = "Não informada"
NOT_INFORMED_M = "Não informado"


# =============================================================================
# 1. Formatação pt-BR
# =============================================================================
def report_timezone() -> ZoneInfo:
    return ZoneInfo(settings.REPORT_TIMEZONE)


def to_report_tz(value: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Datas sem fuso são tratadas como UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz or report_timezone())


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_datetime(value: datetime, tz: Optional[ZoneInfo] = None) -> str:
    return to_report_tz(value, tz).strftime("%d/%m/%Y %H:%M:%S")


def format_weight(weight: float) -> str:
    """12.5 -> '12,5 kg'; 12.3456789 -> '12,3456789 kg'. Nunca usa notação científica."""
    text = format(Decimal(str(weight)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text.replace(".", ",") + " kg"


def build_filename(record: vet_models.Record, tz: Optional[ZoneInfo] = None) -> str:
    """prontuario-<animal>-<dd-mm-aaaa>.pdf, com a data do atendimento."""
    attended = to_report_tz(record.attended_at, tz).strftime("%d-%m-%Y")
    return f"prontuario-{record.animal.name}-{attended}.pdf"


def ascii_filename(filename: str) -> str:
    """Versão ASCII do nome, para o parâmetro `filename` do Content-Disposition."""
    normalized = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    return normalized.replace('"', "").replace("\\", "").replace("/", "-")


# =============================================================================
# 2. Layout
# =============================================================================
def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()["Normal"]
    return {
        "title": ParagraphStyle(
            "title", parent=base, fontName="Helvetica-Bold", fontSize=18, leading=22,
            alignment=TA_CENTER, spaceAfter=6,
        ),
        "generated": ParagraphStyle(
            "generated", parent=base, fontName="Helvetica", fontSize=10, leading=12,
            alignment=TA_CENTER, spaceAfter=18,
        ),
        "section": ParagraphStyle(
            "section", parent=base, fontName="Helvetica-Bold", fontSize=14, leading=18,
            textColor=TEXT_COLOR, spaceBefore=12, spaceAfter=6,
        ),
        "field": ParagraphStyle(
            "field", parent=base, fontName="Helvetica", fontSize=12, leading=16, textColor=TEXT_COLOR,
        ),
        "notes": ParagraphStyle(
            "notes", parent=base, fontName="Helvetica", fontSize=11, leading=15,
            textColor=TEXT_COLOR, alignment=TA_JUSTIFY,
        ),
        "signature": ParagraphStyle(
            "signature", parent=base, fontName="Helvetica", fontSize=10, leading=12,
            alignment=TA_CENTER, textColor=TEXT_COLOR,
        ),
    }


def _field(label: str, value: str, style: ParagraphStyle, *, label_color: Optional[str] = None) -> Paragraph:
    label_markup = f"<b>{escape(label)}</b>"
    if label_color is not None:
        label_markup = f'<font color="{label_color}">{label_markup}</font>'
    return Paragraph(f"{label_markup} {escape(value)}", style)


def _draw_footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(FOOTER_COLOR)
    canvas.drawCentredString(A4[0] / 2, PAGE_MARGIN / 2, FOOTER_TEXT)
    canvas.restoreState()


def render_record_pdf(record: vet_models.Record, *, generated_at: Optional[datetime] = None) -> bytes:
    """
    Monta o PDF (A4, margens de 50pt) a partir de um prontuário com
    `animal` e `animal.owner` já carregados.

    Args:
        record: prontuário com o animal e o tutor carregados
        generated_at: momento da geração (padrão: agora)

    Returns:
        bytes: o documento PDF completo
    """
    tz = report_timezone()
    generated = to_report_tz(generated_at or datetime.now(timezone.utc), tz)
    animal = record.animal
    owner = animal.owner
    styles = _styles()

    story = [
        Paragraph("PRONTUÁRIO DE ATENDIMENTO", styles["title"]),
        Paragraph(
            f"Gerado em: {generated.strftime('%d/%m/%Y')} às {generated.strftime('%H:%M:%S')}",
            styles["generated"],
        ),
        HRFlowable(width="100%", thickness=2, color=ACCENT_COLOR, spaceBefore=0, spaceAfter=12),

        Paragraph("<u>DADOS DO ANIMAL</u>", styles["section"]),
        _field("Nome:", animal.name, styles["field"]),
        _field("Espécie:", animal.species, styles["field"]),
        _field("Raça:", animal.breed or NOT_INFORMED_F, styles["field"]),
        _field(
            "Data de Nascimento:",
            format_date(animal.birth_date) if animal.birth_date else NOT_INFORMED_F,
            styles["field"],
        ),
        Spacer(1, 12),

        Paragraph("<u>DADOS DO TUTOR</u>", styles["section"]),
        _field("Nome:", owner.name, styles["field"]),
        _field("Telefone:", owner.phone, styles["field"]),
        _field("Email:", owner.email or NOT_INFORMED_M, styles["field"]),
        Spacer(1, 18),

        Paragraph("<u>DADOS DO ATENDIMENTO</u>", styles["section"]),
        _field(
            "Data do Atendimento:", format_datetime(record.attended_at, tz), styles["field"],
            label_color=ACCENT_HEX,
        ),
        Spacer(1, 8),
        _field("Peso:", format_weight(record.weight), styles["field"]),
        _field("Medicamentos:", record.medications, styles["field"]),
        _field("Dosagem:", record.dosage, styles["field"]),
        Spacer(1, 8),
        Paragraph("<b>Observações:</b>", styles["field"]),
        Paragraph(escape(record.notes).replace("\n", "<br/>"), styles["notes"]),
        Spacer(1, 72),

        Paragraph("_" * 50, styles["signature"]),
        Spacer(1, 4),
        Paragraph("Assinatura do Veterinário Responsável", styles["signature"]),
    ]

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title="Prontuário de Atendimento",
        author="Vetly",
    )
    doc.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    return buffer.getvalue()
