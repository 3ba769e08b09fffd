"""Resolution of the transaction-currency amount of regular transactions."""

from __future__ import annotations

from decimal import Decimal

import structlog

from priorsync.cards.models import RawRegularTransaction
from priorsync.core.errors import CorruptedAmountError

logger = structlog.get_logger(__name__)


def sign(value: Decimal) -> int:
    """Return -1, 0 or 1 like Math.sign."""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def extract_regular_transaction_amount(
    account_currency: str,
    regular_transaction: RawRegularTransaction,
) -> Decimal:
    """
    Compute the transaction-currency amount of a settled transaction.

    The API sometimes reports ``amount`` with the wrong sign and sometimes
    reports it as zero with the whole sum moved into ``feeAmount``.

    Args:
        account_currency: Currency of the owning card account
        regular_transaction: Raw settled transaction

    Returns:
        Signed amount; direction always follows ``accountAmount``

    Raises:
        CorruptedAmountError: If both amount and fee are zero in a foreign currency
    """
    if account_currency == regular_transaction.trans_curr_iso:
        return regular_transaction.account_amount

    if regular_transaction.amount == 0:
        if regular_transaction.fee_amount != 0:
            return regular_transaction.fee_amount
        logger.error(
            "amount.corrupted",
            account_currency=account_currency,
            regular_transaction=regular_transaction.model_dump(mode="json", by_alias=True),
        )
        raise CorruptedAmountError("Cannot handle corrupted transaction amounts")

    return sign(regular_transaction.account_amount) * abs(regular_transaction.amount)
