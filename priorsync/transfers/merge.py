"""Merging of the two one-sided legs of a transfer into one transfer record.

Items are grouped by a key that is identical for both legs of one real-world
transfer. Inside a group, transfer candidates with a negative posted amount
(outgoing) are paired with candidates with a non-negative posted amount
(incoming) in input order: first outgoing with first incoming, second with
second, and so on. Each pair becomes one transfer placed where its earlier leg
was. Everything else passes through in input order with its id assigned.
"""

from __future__ import annotations

from typing import Callable, Hashable, Sequence, TypeVar

import structlog

from priorsync.normalization.models import CanonicalTransaction, TransferSide

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _account_side(transaction: CanonicalTransaction) -> TransferSide:
    for side in transaction.sides:
        if side.account_type == "ccard" and side.account_id == transaction.account_id:
            return side
    return TransferSide(
        account_type="ccard",
        account_id=transaction.account_id,
        amount=transaction.posted.amount,
        instrument=transaction.posted.instrument,
    )


def merge_pair(outgoing: CanonicalTransaction, incoming: CanonicalTransaction) -> CanonicalTransaction:
    """Build one transfer out of an outgoing and an incoming leg."""
    comments: list[str] = []
    for comment in (outgoing.comment, incoming.comment):
        if comment and comment not in comments:
            comments.append(comment)
    return CanonicalTransaction(
        kind="transfer",
        id=None,
        account_id=outgoing.account_id,
        date=outgoing.date,
        hold=outgoing.hold or incoming.hold,
        posted=outgoing.posted,
        origin=outgoing.origin,
        payee=None,
        mcc=None,
        location=None,
        comment="\n".join(comments) or None,
        sides=(_account_side(outgoing), _account_side(incoming)),
    )


def merge_transfers(
    items: Sequence[T],
    *,
    select_readable_transaction: Callable[[T], CanonicalTransaction],
    is_transfer_item: Callable[[T], bool],
    make_group_key: Callable[[T], Hashable],
    select_transaction_id: Callable[[T], str | None],
) -> list[CanonicalTransaction]:
    """
    Collapse matching transfer legs and pass through everything else.

    Args:
        items: Items sorted ascending by date
        select_readable_transaction: Item -> canonical transaction
        is_transfer_item: Whether an item may be paired
        make_group_key: Key shared by both legs of one transfer
        select_transaction_id: Id for items that are not merged

    Returns:
        Canonical records in input order
    """
    groups: dict[Hashable, list[int]] = {}
    for index, item in enumerate(items):
        groups.setdefault(make_group_key(item), []).append(index)

    merged_at: dict[int, CanonicalTransaction] = {}
    consumed: set[int] = set()
    for key, indexes in groups.items():
        candidates = [index for index in indexes if is_transfer_item(items[index])]
        if len(candidates) < 2:
            continue
        outgoing = [i for i in candidates if select_readable_transaction(items[i]).posted.amount < 0]
        incoming = [i for i in candidates if select_readable_transaction(items[i]).posted.amount >= 0]
        for out_index, in_index in zip(outgoing, incoming):
            merged_at[min(out_index, in_index)] = merge_pair(
                select_readable_transaction(items[out_index]),
                select_readable_transaction(items[in_index]),
            )
            consumed.update((out_index, in_index))
        if len(outgoing) != len(incoming):
            logger.debug(
                "transfers.unpaired_legs",
                group_key=str(key),
                outgoing=len(outgoing),
                incoming=len(incoming),
            )

    result: list[CanonicalTransaction] = []
    for index, item in enumerate(items):
        if index in merged_at:
            result.append(merged_at[index])
        elif index not in consumed:
            readable = select_readable_transaction(item)
            result.append(readable.model_copy(update={"id": select_transaction_id(item)}))

    logger.debug("transfers.merged", items=len(items), transfers=len(merged_at), output=len(result))
    return result
