"""Normalization of raw transactions into canonical transactions."""

from priorsync.normalization.models import (
    Amount,
    TransDetails,
    TransferSide,
    CanonicalTransaction,
    CanonicalAccount,
)
from priorsync.normalization.details import normalize_spaces, parse_trans_details
from priorsync.normalization.amounts import extract_regular_transaction_amount
from priorsync.normalization.comments import format_comment
from priorsync.normalization.normalizer import ApiTransaction, convert_api_transaction

__all__ = [
    # Models
    "Amount",
    "TransDetails",
    "TransferSide",
    "CanonicalTransaction",
    "CanonicalAccount",
    "ApiTransaction",
    # Functions
    "normalize_spaces",
    "parse_trans_details",
    "extract_regular_transaction_amount",
    "format_comment",
    "convert_api_transaction",
]
