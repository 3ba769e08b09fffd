"""Selection of one canonical card per card contract."""

from __future__ import annotations

from typing import Sequence

import structlog

from priorsync.cards.models import RawCard

logger = structlog.get_logger(__name__)

ACTIVE_CARD_STATUS = 1


def choose_distinct_cards(
    cards: Sequence[RawCard],
    active_status: int = ACTIVE_CARD_STATUS,
) -> list[RawCard]:
    """
    Keep exactly one card per contract number.

    Within a contract, active cards rank first, then cards by defaultSynonym
    ascending; the sort is stable so input order breaks remaining ties.

    Args:
        cards: Card list response, possibly with reissued duplicates
        active_status: cardStatus value of an active card

    Returns:
        Surviving cards in their original relative order
    """
    groups: dict[str, list[int]] = {}
    for index, card in enumerate(cards):
        groups.setdefault(card.contract_number, []).append(index)

    evicted: set[int] = set()
    for contract_number, indexes in groups.items():
        ranked = sorted(
            indexes,
            key=lambda i: (
                0 if cards[i].client_object.card_status == active_status else 1,
                cards[i].client_object.default_synonym,
            ),
        )
        for index in ranked[1:]:
            evicted.add(index)
            logger.debug(
                "cards.evicted",
                contract_number=contract_number,
                card_id=cards[index].account_id,
                kept_card_id=cards[ranked[0]].account_id,
            )

    return [card for index, card in enumerate(cards) if index not in evicted]
