"""Raw card payloads, card deduplication and account conversion."""

from priorsync.cards.models import (
    RawCard,
    CardDescription,
    RawAbortedTransaction,
    RawRegularTransaction,
)
from priorsync.cards.dedupe import choose_distinct_cards
from priorsync.cards.accounts import to_account

__all__ = [
    # Models
    "RawCard",
    "CardDescription",
    "RawAbortedTransaction",
    "RawRegularTransaction",
    # Functions
    "choose_distinct_cards",
    "to_account",
]
