"""Raw card and transaction payload models as returned by the bank API.

Field names follow the API's camelCase through aliases, so payloads validate
directly with ``model_validate``. All models are frozen: raw data is read-only
once fetched.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawModel(BaseModel):
    """Base for raw API models (camelCase aliases, immutable, extra keys ignored)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


def ensure_timezone(value: datetime) -> datetime:
    """Attach UTC to naive timestamps; aware ones keep their offset."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ============================================================================
# Card list response
# ============================================================================

class ClientObject(RawModel):
    """Card identity and display data."""

    id: int | str = Field(..., description="Card identity, used as the account id")
    card_contract_number: int | str = Field(..., alias="cardContractNumber", description="Contract number shared by reissued cards")
    card_status: int = Field(..., alias="cardStatus", description="Status code, 1 means active")
    card_masked_number: str = Field(..., alias="cardMaskedNumber", description="Masked card number")
    custom_synonym: str | None = Field(default=None, alias="customSynonym", description="User-defined card name")
    default_synonym: str = Field(default="", alias="defaultSynonym", description="Bank-defined card name")
    curr_iso: str = Field(..., alias="currIso", description="Account currency code")
    type: int | None = Field(default=None, description="5 for credit cards, 6 for debit cards")


class CardBalance(RawModel):
    """Card balance block."""

    available: Decimal = Field(..., description="Available balance in account currency")


class RawCard(RawModel):
    """One entry of the card list response."""

    client_object: ClientObject = Field(..., alias="clientObject")
    balance: CardBalance

    @property
    def account_id(self) -> str:
        return str(self.client_object.id)

    @property
    def contract_number(self) -> str:
        return str(self.client_object.card_contract_number)


# ============================================================================
# Transactions
# ============================================================================

class RawAbortedTransaction(RawModel):
    """An authorized but not settled transaction."""

    trans_amount: Decimal = Field(..., alias="transAmount", description="Amount in transaction currency, inverted sign")
    trans_curr_iso: str = Field(..., alias="transCurrIso", description="Transaction currency code")
    amount: Decimal = Field(..., description="Amount in account currency")
    trans_details: str = Field(..., alias="transDetails", description="Free-text merchant description")
    trans_date: datetime = Field(..., alias="transDate", description="Transaction timestamp")
    trans_time: str | None = Field(default=None, alias="transTime", description="Local time of day")

    @field_validator("trans_date")
    @classmethod
    def trans_date_timezone(cls, value: datetime) -> datetime:
        return ensure_timezone(value)


class RawRegularTransaction(RawModel):
    """A settled transaction."""

    account_amount: Decimal = Field(..., alias="accountAmount", description="Signed amount in account currency")
    fee_amount: Decimal = Field(default=Decimal("0"), alias="feeAmount", description="Fee amount")
    amount: Decimal = Field(..., description="Amount in transaction currency, sign unreliable")
    trans_curr_iso: str = Field(..., alias="transCurrIso", description="Transaction currency code")
    trans_details: str = Field(..., alias="transDetails", description="Free-text merchant description")
    trans_date: datetime = Field(..., alias="transDate", description="Transaction timestamp")
    trans_time: str | None = Field(default=None, alias="transTime", description="Local time of day")

    @field_validator("trans_date")
    @classmethod
    def trans_date_timezone(cls, value: datetime) -> datetime:
        return ensure_timezone(value)


# ============================================================================
# Card description response
# ============================================================================

class AbortedContract(RawModel):
    aborted_transaction_list: list[RawAbortedTransaction] = Field(default_factory=list, alias="abortedTransactionList")


class TransCard(RawModel):
    transaction_list: list[RawRegularTransaction] = Field(default_factory=list, alias="transactionList")


class ContractAccount(RawModel):
    trans_card_list: list[TransCard] = Field(default_factory=list, alias="transCardList")


class CardContract(RawModel):
    aborted_contract_list: list[AbortedContract] = Field(default_factory=list, alias="abortedContractList")
    account: ContractAccount = Field(default_factory=ContractAccount)


class CardDescription(RawModel):
    """One entry of the card description response, matched to a card by id."""

    id: int | str = Field(..., description="Card identity, equals clientObject.id")
    contract: CardContract = Field(default_factory=CardContract)
