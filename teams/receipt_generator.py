# teams/receipt_generator.py

import logging
from io import BytesIO

from django.conf import settings

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.lib import colors

from .qr import make_qr_png

logger = logging.getLogger("registrations.receipts")

PRIMARY = colors.HexColor("#7C3AED")
TEXT_DARK = colors.HexColor("#1F2937")
TEXT_MUTED = colors.HexColor("#6B7280")
BORDER = colors.HexColor("#E5E7EB")
WARN_BG = colors.HexColor("#FEF3C7")
WARN_TEXT = colors.HexColor("#92400E")

MARGIN = 50
ROW_HEIGHT = 22


def receipt_filename(registration_id: str) -> str:
    prefix = getattr(settings, "RECEIPT_FILENAME_PREFIX", "Receipt")
    return f"{prefix}-Receipt-{registration_id}.pdf"


def _qr_reader(registration_id):
    """
    QR image for the registration id, or None.
    The receipt is still useful without it.
    """
    try:
        png = make_qr_png(registration_id, box_size=6, border=1, fill_color="#1F2937")
        return ImageReader(BytesIO(png))
    except Exception as e:
        logger.warning(f"QR generation failed for {registration_id}: {e}")
        return None


def _draw_label_value(p, x, y, label, value):
    p.setFont("Helvetica", 10)
    p.setFillColor(TEXT_MUTED)
    p.drawString(x, y, label)
    p.setFont("Helvetica-Bold", 11)
    p.setFillColor(TEXT_DARK)
    p.drawString(x + 110, y, str(value))


def _fit(text, limit):
    text = str(text)
    return text if len(text) <= limit else text[: limit - 1] + "…"


def generate_receipt_pdf(team) -> bytes:
    """
    Render a one-page A4 registration receipt and return the PDF bytes.

    Contains the registration id (text + scannable QR), team details and
    the member table with the leader first.
    """
    buffer = BytesIO()
    width, height = A4
    p = canvas.Canvas(buffer, pagesize=A4)
    p.setTitle(f"{settings.EVENT_NAME} Registration Receipt - {team.registration_id}")

    # ---------- Header band ----------
    p.setFillColor(PRIMARY)
    p.rect(0, height - 110, width, 110, stroke=0, fill=1)
    p.setFillColor(colors.white)
    p.setFont("Helvetica-Bold", 26)
    p.drawString(MARGIN, height - 60, settings.EVENT_NAME)
    p.setFont("Helvetica", 12)
    p.drawString(MARGIN, height - 85, f"Registration Receipt · {settings.EVENT_ORGANIZER}")

    # ---------- Registration id + QR ----------
    y = height - 150
    p.setFillColor(TEXT_DARK)
    p.setFont("Helvetica", 10)
    p.drawString(MARGIN, y, "REGISTRATION ID")
    p.setFont("Courier-Bold", 18)
    p.setFillColor(PRIMARY)
    p.drawString(MARGIN, y - 24, team.registration_id)

    qr_size = 90
    qr_reader = _qr_reader(team.registration_id)
    if qr_reader is not None:
        p.drawImage(qr_reader, width - MARGIN - qr_size, y - qr_size + 12,
                    width=qr_size, height=qr_size, mask="auto")

    # ---------- Team details ----------
    y -= 110
    p.setStrokeColor(BORDER)
    p.line(MARGIN, y + 20, width - MARGIN, y + 20)

    registered_at = team.created_at.strftime("%B %d, %Y %I:%M %p") if team.created_at else ""
    details = [
        ("Team Name", team.team_name),
        ("Department", team.department),
        ("Leader Email", team.leader_email),
        ("Leader Phone", team.leader_phone),
        ("Status", team.status),
        ("Registered On", registered_at),
    ]
    for label, value in details:
        _draw_label_value(p, MARGIN, y, label, value)
        y -= ROW_HEIGHT

    # ---------- Members table ----------
    y -= 15
    p.setFont("Helvetica-Bold", 13)
    p.setFillColor(TEXT_DARK)
    p.drawString(MARGIN, y, "Team Members")
    y -= 22

    columns = [("#", MARGIN), ("Name", MARGIN + 25), ("Roll No", MARGIN + 200),
               ("Year", MARGIN + 290), ("Email", MARGIN + 360)]
    p.setFont("Helvetica-Bold", 9)
    p.setFillColor(TEXT_MUTED)
    for title, x in columns:
        p.drawString(x, y, title)
    y -= 6
    p.line(MARGIN, y, width - MARGIN, y)
    y -= 14

    for index, member in enumerate(team.members.all(), start=1):
        p.setFont("Helvetica-Bold" if member.is_leader else "Helvetica", 9)
        p.setFillColor(TEXT_DARK)
        name = _fit(member.name, 28) + (" (Leader)" if member.is_leader else "")
        row = [str(index), name, _fit(member.roll_no, 14), member.year, _fit(member.email, 30)]
        for (_, x), value in zip(columns, row):
            p.drawString(x, y, value)
        y -= ROW_HEIGHT - 4

    # ---------- Instructions ----------
    y -= 20
    box_height = 80
    p.setFillColor(WARN_BG)
    p.roundRect(MARGIN, y - box_height, width - 2 * MARGIN, box_height, 6, stroke=0, fill=1)
    p.setFillColor(WARN_TEXT)
    p.setFont("Helvetica-Bold", 10)
    p.drawString(MARGIN + 12, y - 18, "Important")
    p.setFont("Helvetica", 9)
    instructions = [
        "Keep your Registration ID handy - you will need it on event day.",
        "All team members must carry valid college ID cards.",
        "Report at the venue 30 minutes before the event.",
    ]
    line_y = y - 34
    for line in instructions:
        p.drawString(MARGIN + 12, line_y, f"• {line}")
        line_y -= 14

    # ---------- Footer ----------
    p.setFont("Helvetica-Oblique", 8)
    p.setFillColor(TEXT_MUTED)
    p.drawCentredString(width / 2.0, 30,
                        f"This is a system generated receipt from {settings.EVENT_ORGANIZER}.")

    p.showPage()
    p.save()

    buffer.seek(0)
    return buffer.getvalue()
