"""Per-item functions the transfer merge engine is driven by."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from priorsync.normalization.models import CanonicalTransaction
from priorsync.normalization.normalizer import ApiTransaction

TRANSFER_MARKERS: tuple[str, ...] = ("P2P SDBO", "P2P_SDBO")


@dataclass(frozen=True)
class ConversionItem:
    """A canonical transaction paired with the raw transaction it came from."""

    api_transaction: ApiTransaction
    readable_transaction: CanonicalTransaction


def select_readable_transaction(item: ConversionItem) -> CanonicalTransaction:
    return item.readable_transaction


def format_amount(value: Decimal) -> str:
    """Plain magnitude without trailing zeros or exponent: 50, 10.5."""
    return format(abs(value).normalize(), "f")


def is_transfer_item(item: ConversionItem, markers: Sequence[str] = TRANSFER_MARKERS) -> bool:
    """Bank-marked internal transfers and cash transfers may be paired."""
    if item.readable_transaction.kind == "transfer":
        return True
    trans_details = item.api_transaction.payload.trans_details
    return any(marker in trans_details for marker in markers)


def make_group_key(item: ConversionItem) -> str:
    """Key identical for both opposite-signed legs of one transfer."""
    transaction = item.readable_transaction
    amount = transaction.origin or transaction.posted
    trans_time = item.api_transaction.payload.trans_time or ""
    return (
        f"{format_amount(amount.amount)} {amount.instrument} "
        f"@ {transaction.date.isoformat()} {trans_time}"
    ).rstrip()


def select_transaction_id(item: ConversionItem) -> str | None:
    """Deterministic id for re-import detection; None for cash/ATM transfers."""
    transaction = item.readable_transaction
    if transaction.kind == "transfer":
        return None
    direction = "+" if transaction.posted.amount >= 0 else "-"
    return f"{make_group_key(item)} {direction}"
