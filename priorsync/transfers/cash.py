"""Reshaping of ATM/cash transactions into cash transfers."""

from __future__ import annotations

from priorsync.normalization.models import CanonicalTransaction, TransferSide


def as_cash_transfer(transaction: CanonicalTransaction) -> CanonicalTransaction:
    """
    Turn a card transaction into a transfer between the card and cash.

    The card side keeps the posted amount; the cash side receives the
    opposite of the amount actually handed out (origin when present).
    """
    cash_amount = transaction.origin or transaction.posted
    return transaction.model_copy(
        update={
            "kind": "transfer",
            "payee": None,
            "sides": (
                TransferSide(
                    account_type="ccard",
                    account_id=transaction.account_id,
                    amount=transaction.posted.amount,
                    instrument=transaction.posted.instrument,
                ),
                TransferSide(
                    account_type="cash",
                    account_id=None,
                    amount=-cash_amount.amount,
                    instrument=cash_amount.instrument,
                ),
            ),
        }
    )
