"""Data models for canonical accounts and transactions."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Amount(BaseModel):
    """A signed amount in a given currency."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., description="Signed amount")
    instrument: str = Field(..., description="ISO 4217 currency code")


class TransDetails(BaseModel):
    """Result of parsing a raw transDetails string."""

    model_config = ConfigDict(frozen=True)

    type: str | None = Field(default=None, description="Matched detail prefix (e.g. Retail, ATM)")
    payee: str | None = Field(default=None, description="Text after the matched prefix")
    comment: str | None = Field(default=None, description="Whole text when no prefix matched")


class TransferSide(BaseModel):
    """One leg of a transfer."""

    model_config = ConfigDict(frozen=True)

    account_type: Literal["ccard", "cash"] = Field(default="ccard", description="Kind of account on this side")
    account_id: str | None = Field(default=None, description="Account id, None for cash")
    amount: Decimal = Field(..., description="Signed amount from this side's point of view")
    instrument: str = Field(..., description="Currency of this side")


class CanonicalTransaction(BaseModel):
    """A canonical transaction or transfer handed to the aggregator."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transaction", "transfer"] = Field(default="transaction", description="Record kind")
    id: str | None = Field(default=None, description="Deterministic id, None for transfers")
    account_id: str = Field(..., description="Owning account id")
    date: datetime = Field(..., description="Transaction timestamp")
    hold: bool = Field(..., description="True for aborted (not settled) transactions")
    posted: Amount = Field(..., description="Amount in account currency")
    origin: Amount | None = Field(default=None, description="Amount in transaction currency when it differs")
    payee: str | None = Field(default=None, description="Counterparty name")
    mcc: int | None = Field(default=None, description="Merchant category code")
    location: str | None = Field(default=None, description="Transaction location")
    comment: str | None = Field(default=None, description="Free-text comment")
    sides: tuple[TransferSide, ...] = Field(default=(), description="Transfer legs, empty for transactions")


class CanonicalAccount(BaseModel):
    """A canonical card account handed to the aggregator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Account id")
    title: str = Field(..., description="Display name")
    type: Literal["ccard"] = Field(default="ccard", description="Account type")
    sync_ids: list[str] = Field(..., alias="syncID", description="Last four digits of the card number")
    instrument: str = Field(..., description="Account currency")
    balance: Decimal = Field(..., description="Available balance")
