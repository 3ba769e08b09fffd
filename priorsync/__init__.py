"""Card and transaction conversion for the bank connector."""

from priorsync.conversion.pipeline import (
    ConversionResult,
    convert_accounts,
    convert_api_cards_to_readable_transactions,
    run_conversion,
)

__all__ = [
    "ConversionResult",
    "convert_accounts",
    "convert_api_cards_to_readable_transactions",
    "run_conversion",
]
