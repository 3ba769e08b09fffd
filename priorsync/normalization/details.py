"""Parsing of the free-text transDetails field."""

from __future__ import annotations

from typing import Sequence

from priorsync.normalization.models import TransDetails

# Checked in this order; prefixes are not mutually exclusive.
KNOWN_TRANSACTION_TYPES: tuple[str, ...] = ("Retail", "ATM", "CH Debit", "CH Payment", "Cash")


def normalize_spaces(text: str) -> str:
    """Drop the empty tokens produced by splitting on single spaces and rejoin."""
    return " ".join(token for token in text.split(" ") if token)


def parse_trans_details(
    trans_details: str,
    known_types: Sequence[str] = KNOWN_TRANSACTION_TYPES,
) -> TransDetails:
    """
    Split a transDetails string into a type token and a payee or comment.

    The first known type for which the text starts with ``type + " "`` wins:
    - "Retail  SHOP  MINSK" -> type="Retail", payee="SHOP MINSK"
    - "Some  note" -> type=None, comment="Some note"

    Args:
        trans_details: Raw transDetails text
        known_types: Ordered prefixes to check

    Returns:
        Parsed details; never fails
    """
    for known_type in known_types:
        if trans_details.startswith(known_type + " "):
            return TransDetails(
                type=known_type,
                payee=normalize_spaces(trans_details[len(known_type):]),
                comment=None,
            )
    return TransDetails(type=None, payee=None, comment=normalize_spaces(trans_details))
