"""Conversion pipeline that orchestrates the card and transaction stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import partial
from typing import Any, Sequence

import structlog
from pydantic import TypeAdapter, ValidationError

from priorsync.cards.accounts import to_account
from priorsync.cards.dedupe import choose_distinct_cards
from priorsync.cards.models import CardDescription, RawCard
from priorsync.conversion.config import ConversionConfig
from priorsync.conversion.metrics import ConversionMetrics
from priorsync.core.errors import MissingCardDescriptionError, PayloadValidationError
from priorsync.normalization.details import parse_trans_details
from priorsync.normalization.models import CanonicalAccount, CanonicalTransaction
from priorsync.normalization.normalizer import (
    ABORTED_TRANSACTION,
    REGULAR_TRANSACTION,
    ApiTransaction,
    convert_api_transaction,
)
from priorsync.transfers.cash import as_cash_transfer
from priorsync.transfers.keys import (
    ConversionItem,
    is_transfer_item,
    make_group_key,
    select_readable_transaction,
    select_transaction_id,
)
from priorsync.transfers.merge import merge_transfers

logger = structlog.get_logger(__name__)

_cards_adapter = TypeAdapter(list[RawCard])
_descriptions_adapter = TypeAdapter(list[CardDescription])


@dataclass
class ConversionResult:
    """Accounts and transactions produced by one run."""

    accounts: list[CanonicalAccount] = field(default_factory=list)
    transactions: list[CanonicalTransaction] = field(default_factory=list)
    metrics: ConversionMetrics | None = None


def collect_api_transactions(
    cards: Sequence[RawCard],
    card_descriptions: Sequence[CardDescription],
) -> list[ApiTransaction]:
    """
    Flatten the nested per-card transaction lists.

    Aborted transactions of all cards come first, then regular ones. The API
    lists are newest-first, so each one is reversed to ascending order.

    Raises:
        MissingCardDescriptionError: If a card has no description entry
    """
    descriptions_by_id = {str(description.id): description for description in card_descriptions}

    def description_for(card: RawCard) -> CardDescription:
        try:
            return descriptions_by_id[card.account_id]
        except KeyError:
            raise MissingCardDescriptionError(card.account_id) from None

    aborted = [
        ApiTransaction(kind=ABORTED_TRANSACTION, payload=transaction, card=card)
        for card in cards
        for aborted_contract in description_for(card).contract.aborted_contract_list
        for transaction in reversed(aborted_contract.aborted_transaction_list)
    ]
    regular = [
        ApiTransaction(kind=REGULAR_TRANSACTION, payload=transaction, card=card)
        for card in cards
        for trans_card in description_for(card).contract.account.trans_card_list
        for transaction in reversed(trans_card.transaction_list)
    ]
    return aborted + regular


def convert_api_cards_to_readable_transactions(
    cards_without_duplicates: Sequence[RawCard],
    card_descriptions: Sequence[CardDescription],
    config: ConversionConfig | None = None,
    metrics: ConversionMetrics | None = None,
) -> list[CanonicalTransaction]:
    """
    Convert all transactions of the given (already deduplicated) cards.

    Args:
        cards_without_duplicates: Output of ``choose_distinct_cards``
        card_descriptions: Card description response
        config: Conversion configuration
        metrics: Optional counters filled in during the run

    Returns:
        Canonical transactions and transfers, ascending by date
    """
    config = config or ConversionConfig()
    api_transactions = collect_api_transactions(cards_without_duplicates, card_descriptions)

    items: list[ConversionItem] = []
    cash_count = 0
    for api_transaction in api_transactions:
        readable = convert_api_transaction(api_transaction, config.known_transaction_types)
        details = parse_trans_details(
            api_transaction.payload.trans_details, config.known_transaction_types
        )
        if details.type in config.cash_transaction_types:
            readable = as_cash_transfer(readable)
            cash_count += 1
        items.append(ConversionItem(api_transaction=api_transaction, readable_transaction=readable))

    items.sort(key=lambda item: item.readable_transaction.date)

    transactions = merge_transfers(
        items,
        select_readable_transaction=select_readable_transaction,
        is_transfer_item=partial(is_transfer_item, markers=config.transfer_markers),
        make_group_key=make_group_key,
        select_transaction_id=select_transaction_id,
    )

    if metrics is not None:
        metrics.aborted_transactions += sum(1 for t in api_transactions if t.kind == ABORTED_TRANSACTION)
        metrics.regular_transactions += sum(1 for t in api_transactions if t.kind == REGULAR_TRANSACTION)
        metrics.cash_reclassified += cash_count
        metrics.transfers_merged += len(items) - len(transactions)
        metrics.records_produced += len(transactions)

    return transactions


def convert_accounts(
    cards: Sequence[RawCard],
    config: ConversionConfig | None = None,
) -> list[CanonicalAccount]:
    """Deduplicate cards and map them to canonical accounts."""
    config = config or ConversionConfig()
    return [to_account(card) for card in choose_distinct_cards(cards, config.active_card_status)]


def run_conversion(
    cards_payload: Any,
    card_descriptions_payload: Any,
    config: ConversionConfig | None = None,
) -> ConversionResult:
    """
    Validate raw payloads and run the whole conversion.

    Any error aborts the run; there are no partial results.

    Raises:
        PayloadValidationError: If a payload does not match the API models
        ConversionError: On any conversion failure
    """
    config = config or ConversionConfig()
    config.validate_config()
    metrics = ConversionMetrics(started_at=datetime.now(timezone.utc))

    try:
        cards = _cards_adapter.validate_python(cards_payload)
        card_descriptions = _descriptions_adapter.validate_python(card_descriptions_payload)
    except ValidationError as e:
        logger.error("conversion.invalid_payload", error_count=e.error_count())
        raise PayloadValidationError(str(e)) from e

    distinct_cards = choose_distinct_cards(cards, config.active_card_status)
    metrics.cards_received = len(cards)
    metrics.cards_evicted = len(cards) - len(distinct_cards)

    accounts = [to_account(card) for card in distinct_cards]
    metrics.accounts_produced = len(accounts)

    transactions = convert_api_cards_to_readable_transactions(
        distinct_cards, card_descriptions, config=config, metrics=metrics
    )

    metrics.complete(datetime.now(timezone.utc))
    logger.info("conversion.completed", **metrics.to_dict())
    return ConversionResult(accounts=accounts, transactions=transactions, metrics=metrics)
