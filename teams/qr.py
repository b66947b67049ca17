# teams/qr.py
import base64
import json
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M

BADGE_FILL = "#7c3aed"
BADGE_BACK = "#ffffff"


def make_qr_png(data: str, box_size: int = 10, border: int = 2,
                fill_color: str = "black", back_color: str = "white") -> bytes:
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color=fill_color, back_color=back_color)
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def badge_payload(team) -> str:
    return json.dumps({
        "registrationId": team.registration_id,
        "teamName": team.team_name,
        "department": team.department,
        "memberCount": team.members.count(),
    })


def team_badge_data_url(team) -> str:
    """data:image/png;base64,... for the admin badge printer."""
    png = make_qr_png(badge_payload(team), box_size=8, border=2,
                      fill_color=BADGE_FILL, back_color=BADGE_BACK)
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
