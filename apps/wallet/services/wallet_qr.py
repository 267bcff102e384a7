"""Wallet QR codes scanned by conductors to start a payment request."""

import io
import json

import qrcode

from apps.accounts.models import User


def wallet_qr_payload(*, user: User) -> str:
    return json.dumps({
        'userId': str(user.id),
        'name': user.get_full_name(),
    })


def generate_wallet_qr(*, user: User) -> bytes:
    """PNG image of the user's wallet QR code."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(wallet_qr_payload(user=user))
    qr.make(fit=True)

    image = qr.make_image(fill_color='black', back_color='white')
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()
