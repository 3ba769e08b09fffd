"""Cross-currency note attached to transaction comments."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from priorsync.normalization.models import Amount


def format_comment(posted: Amount, origin: Amount | None) -> str | None:
    """
    Describe a currency conversion, e.g. ``"10.00 USD = 20.00 BYN (rate 2.0000)"``.

    Returns None when there is no origin amount, the currencies match,
    or the origin amount is zero.
    """
    if origin is None or origin.instrument == posted.instrument or origin.amount == 0:
        return None

    origin_abs = abs(origin.amount)
    posted_abs = abs(posted.amount)
    rate = (posted_abs / origin_abs).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)
    return (
        f"{origin_abs.quantize(Decimal('0.01'))} {origin.instrument} = "
        f"{posted_abs.quantize(Decimal('0.01'))} {posted.instrument} (rate {rate})"
    )
