"""
Conversion error taxonomy.

Every error raised by the conversion core derives from ConversionError.
None of them is retried: a single bad record fails the whole run.
"""


class ConversionError(Exception):
    """Base exception for conversion errors."""

    pass


class CorruptedAmountError(ConversionError):
    """Raised when a foreign-currency transaction has zero amount and zero fee."""

    pass


class UnsupportedTransactionKind(ConversionError):
    """Raised on an unknown transaction variant tag (upstream schema drift)."""

    def __init__(self, kind: str):
        super().__init__(f'apiTransaction.type "{kind}" not implemented')
        self.kind = kind


class MissingCardDescriptionError(ConversionError):
    """Raised when a card has no matching entry in the card-description response."""

    def __init__(self, card_id: str):
        super().__init__(f"No card description for card {card_id}")
        self.card_id = card_id


class PayloadValidationError(ConversionError):
    """Raised when a raw API payload does not fit the expected shape."""

    pass
