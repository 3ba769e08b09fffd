from __future__ import annotations

from priorsync.cards.models import RawCard
from priorsync.normalization.models import CanonicalAccount


def to_account(card: RawCard) -> CanonicalAccount:
    """Map a card to a canonical card account (limits are not reported by the API)."""
    client_object = card.client_object
    return CanonicalAccount(
        id=card.account_id,
        title=client_object.custom_synonym or client_object.default_synonym,
        type="ccard",
        sync_ids=[client_object.card_masked_number[-4:]],
        instrument=client_object.curr_iso,
        balance=card.balance.available,
    )
