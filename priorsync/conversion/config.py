"""Configuration for the conversion pipeline."""

from __future__ import annotations

from pydantic import BaseModel, Field

from priorsync.core.config import get_settings
from priorsync.normalization.details import KNOWN_TRANSACTION_TYPES
from priorsync.transfers.keys import TRANSFER_MARKERS


class ConversionConfig(BaseModel):
    """Main configuration for the conversion pipeline."""

    known_transaction_types: list[str] = Field(
        default_factory=lambda: list(KNOWN_TRANSACTION_TYPES),
        description="Detail prefixes in the order they are checked",
    )
    cash_transaction_types: list[str] = Field(
        default_factory=lambda: ["ATM", "Cash"],
        description="Detail types reclassified as cash transfers",
    )
    transfer_markers: list[str] = Field(
        default_factory=lambda: list(TRANSFER_MARKERS),
        description="transDetails substrings marking internal transfer legs",
    )
    active_card_status: int = Field(
        default=1, description="cardStatus value of an active card"
    )

    def validate_config(self) -> None:
        """Ensure every cash type can actually be produced by the details parser.

        Raises ValueError if validation fails.
        """
        unknown = set(self.cash_transaction_types) - set(self.known_transaction_types)
        if unknown:
            raise ValueError(
                f"Cash transaction types must be known types, got {sorted(unknown)}"
            )
        if not self.transfer_markers:
            raise ValueError("At least one transfer marker is required")


def get_conversion_config() -> ConversionConfig:
    """Build the conversion configuration from application settings."""
    settings = get_settings()
    config = ConversionConfig(
        cash_transaction_types=list(settings.CONVERSION_CASH_TRANSACTION_TYPES),
        transfer_markers=list(settings.CONVERSION_TRANSFER_MARKERS),
    )
    config.validate_config()
    return config
