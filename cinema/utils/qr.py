import base64
import io
import json

import qrcode


def render_qr_data_url(summary: dict) -> str:
    """Encode a reservation summary as a PNG QR code data URL."""
    image = qrcode.make(json.dumps(summary, separators=(",", ":")))
    buffer = io.BytesIO()
    image.save(buffer)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
