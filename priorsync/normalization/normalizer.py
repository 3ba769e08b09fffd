"""Conversion of raw API transactions into canonical transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from priorsync.cards.models import RawAbortedTransaction, RawCard, RawRegularTransaction
from priorsync.core.errors import UnsupportedTransactionKind
from priorsync.normalization.amounts import extract_regular_transaction_amount, sign
from priorsync.normalization.comments import format_comment
from priorsync.normalization.details import KNOWN_TRANSACTION_TYPES, parse_trans_details
from priorsync.normalization.models import Amount, CanonicalTransaction, TransDetails

ABORTED_TRANSACTION = "abortedTransaction"
REGULAR_TRANSACTION = "regularTransaction"

RawTransactionPayload = Union[RawAbortedTransaction, RawRegularTransaction]


@dataclass(frozen=True)
class ApiTransaction:
    """A raw transaction tagged with its variant and owning card."""

    kind: str
    payload: RawTransactionPayload
    card: RawCard


def _build_comment(details: TransDetails, posted: Amount, origin: Amount | None) -> str | None:
    parts = [details.comment, format_comment(posted, origin)]
    return "\n".join(part for part in parts if part) or None


def convert_api_transaction(
    api_transaction: ApiTransaction,
    known_types: Sequence[str] = KNOWN_TRANSACTION_TYPES,
) -> CanonicalTransaction:
    """
    Map one raw transaction to the canonical shape.

    Args:
        api_transaction: Tagged raw transaction
        known_types: Ordered detail prefixes for the details parser

    Returns:
        Canonical transaction with ``id=None``

    Raises:
        UnsupportedTransactionKind: If the variant tag is unknown
        CorruptedAmountError: If a foreign regular transaction has no usable amount
    """
    card = api_transaction.card
    account_currency = card.client_object.curr_iso

    if api_transaction.kind == ABORTED_TRANSACTION:
        aborted: RawAbortedTransaction = api_transaction.payload  # type: ignore[assignment]
        details = parse_trans_details(aborted.trans_details, known_types)
        # Aborted records carry transAmount with an inverted sign.
        posted = Amount(
            amount=sign(-aborted.trans_amount) * abs(aborted.amount),
            instrument=account_currency,
        )
        origin = None
        if aborted.trans_curr_iso != account_currency:
            origin = Amount(amount=-aborted.trans_amount, instrument=aborted.trans_curr_iso)
        return CanonicalTransaction(
            kind="transaction",
            id=None,
            account_id=card.account_id,
            date=aborted.trans_date,
            hold=True,
            posted=posted,
            origin=origin,
            payee=details.payee,
            mcc=None,
            location=None,
            comment=_build_comment(details, posted, origin),
        )

    if api_transaction.kind == REGULAR_TRANSACTION:
        regular: RawRegularTransaction = api_transaction.payload  # type: ignore[assignment]
        details = parse_trans_details(regular.trans_details, known_types)
        posted = Amount(amount=regular.account_amount, instrument=account_currency)
        origin = None
        if regular.trans_curr_iso != account_currency:
            origin = Amount(
                amount=extract_regular_transaction_amount(account_currency, regular),
                instrument=regular.trans_curr_iso,
            )
        return CanonicalTransaction(
            kind="transaction",
            id=None,
            account_id=card.account_id,
            date=regular.trans_date,
            hold=False,
            posted=posted,
            origin=origin,
            payee=details.payee,
            mcc=None,
            location=None,
            comment=_build_comment(details, posted, origin),
        )

    raise UnsupportedTransactionKind(api_transaction.kind)
