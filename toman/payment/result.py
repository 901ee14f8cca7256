from __future__ import annotations

from dataclasses import dataclass

from toman.utils.qr import generate_payment_qr


@dataclass(frozen=True)
class PaymentResult:
    transaction_id: str
    redirect_url: str

    def qr_png(self, *, size: int = 400) -> bytes:
        """PNG QR code of the redirect URL, for sending as a photo."""
        return generate_payment_qr(self.redirect_url, size=size)
