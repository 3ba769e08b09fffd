"""Tests for details parsing, amount resolution and transaction normalization."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from priorsync.cards.models import RawAbortedTransaction, RawRegularTransaction
from priorsync.core.errors import CorruptedAmountError, UnsupportedTransactionKind
from priorsync.normalization.amounts import extract_regular_transaction_amount, sign
from priorsync.normalization.comments import format_comment
from priorsync.normalization.details import normalize_spaces, parse_trans_details
from priorsync.normalization.models import Amount
from priorsync.normalization.normalizer import (
    ABORTED_TRANSACTION,
    REGULAR_TRANSACTION,
    ApiTransaction,
    convert_api_transaction,
)
from tests.fixtures.sample_payloads import aborted_payload, regular_payload


def _regular(**kwargs):
    return RawRegularTransaction.model_validate(regular_payload(**kwargs))


def _aborted(**kwargs):
    return RawAbortedTransaction.model_validate(aborted_payload(**kwargs))


class TestNormalizeSpaces:
    """Test whitespace collapsing."""

    def test_collapses_runs_of_spaces(self):
        """Runs of spaces collapse and ends are trimmed."""
        assert normalize_spaces("  SHOP   MINSK  ") == "SHOP MINSK"

    def test_empty_and_blank(self):
        """Blank input normalizes to an empty string."""
        assert normalize_spaces("") == ""
        assert normalize_spaces("    ") == ""

    def test_idempotent(self):
        """Normalizing twice equals normalizing once."""
        for text in ["a  b", "  lead", "trail  ", "one", "", "x   y   z "]:
            once = normalize_spaces(text)
            assert normalize_spaces(once) == once


class TestParseTransDetails:
    """Test detail prefix recognition."""

    def test_known_prefix(self):
        """A known prefix splits off as the type."""
        details = parse_trans_details("Retail  SHOP   MINSK")
        assert details.type == "Retail"
        assert details.payee == "SHOP MINSK"
        assert details.comment is None

    def test_multi_word_prefix(self):
        """Multi-word prefixes are matched whole."""
        details = parse_trans_details("CH Debit BLR  MINSK P2P")
        assert details.type == "CH Debit"
        assert details.payee == "BLR MINSK P2P"

    def test_atm(self):
        """ATM details yield the ATM type."""
        details = parse_trans_details("ATM 123 MINSK")
        assert details.type == "ATM"
        assert details.payee == "123 MINSK"

    def test_prefix_requires_trailing_space(self):
        """'Cashback' must not be read as a Cash transaction."""
        details = parse_trans_details("Cashback  bonus")
        assert details.type is None
        assert details.payee is None
        assert details.comment == "Cashback bonus"

    def test_bare_prefix_is_a_comment(self):
        """A prefix with nothing after it stays a comment."""
        details = parse_trans_details("ATM")
        assert details.type is None
        assert details.comment == "ATM"

    def test_empty_string(self):
        """Empty details give an empty comment."""
        details = parse_trans_details("")
        assert details.type is None
        assert details.comment == ""

    def test_first_prefix_in_order_wins(self):
        """Known types are tried in list order."""
        details = parse_trans_details("CH Debit X", known_types=["CH", "CH Debit"])
        assert details.type == "CH"
        assert details.payee == "Debit X"


class TestExtractRegularTransactionAmount:
    """Test transaction-currency amount resolution."""

    def test_same_currency_returns_account_amount(self):
        """Same-currency records use accountAmount."""
        tx = _regular(account_amount=-50, details="Retail SHOP", amount=999)
        assert extract_regular_transaction_amount("BYN", tx) == Decimal("-50")

    def test_foreign_amount_resigned_to_account_direction(self):
        """Foreign amount takes the accountAmount sign."""
        tx = _regular(account_amount=-20, details="Retail AMAZON", currency="USD", amount=10)
        assert extract_regular_transaction_amount("BYN", tx) == Decimal("-10")

    def test_foreign_refund_keeps_positive_sign(self):
        """Incoming foreign amounts stay positive."""
        tx = _regular(account_amount=20, details="Retail AMAZON", currency="USD", amount=-10)
        assert extract_regular_transaction_amount("BYN", tx) == Decimal("10")

    def test_zero_amount_uses_fee(self):
        """A zero amount falls back to the fee."""
        tx = _regular(account_amount=-3, details="Fee", currency="USD", amount=0, fee=-1.5)
        assert extract_regular_transaction_amount("BYN", tx) == Decimal("-1.5")

    def test_zero_amount_and_fee_is_corrupted(self):
        """Zero amount and zero fee raise."""
        tx = _regular(account_amount=-3, details="Broken", currency="USD", amount=0, fee=0)
        with pytest.raises(CorruptedAmountError):
            extract_regular_transaction_amount("BYN", tx)

    def test_sign(self):
        """sign returns -1, 0 or 1."""
        assert sign(Decimal("-2.5")) == -1
        assert sign(Decimal("0")) == 0
        assert sign(Decimal("7")) == 1


class TestFormatComment:
    """Test the cross-currency note."""

    def test_no_origin(self):
        """No origin amount means no note."""
        assert format_comment(Amount(amount=Decimal("-5"), instrument="BYN"), None) is None

    def test_conversion_note(self):
        """The note shows both amounts and the rate."""
        posted = Amount(amount=Decimal("-20"), instrument="BYN")
        origin = Amount(amount=Decimal("-10"), instrument="USD")
        assert format_comment(posted, origin) == "10.00 USD = 20.00 BYN (rate 2.0000)"

    def test_zero_origin(self):
        """A zero origin amount gives no note."""
        posted = Amount(amount=Decimal("-1"), instrument="BYN")
        origin = Amount(amount=Decimal("0"), instrument="USD")
        assert format_comment(posted, origin) is None


class TestConvertApiTransaction:
    """Test mapping of raw transactions to canonical ones."""

    def test_regular_same_currency(self, byn_card):
        """A plain card purchase maps field by field."""
        api_tx = ApiTransaction(
            kind=REGULAR_TRANSACTION,
            payload=_regular(account_amount=-50, details="ATM 123 MINSK", date="2024-03-03T10:00:00+03:00"),
            card=byn_card,
        )
        tx = convert_api_transaction(api_tx)

        assert tx.kind == "transaction"
        assert tx.id is None
        assert tx.account_id == "42"
        assert tx.hold is False
        assert tx.posted == Amount(amount=Decimal("-50"), instrument="BYN")
        assert tx.origin is None
        assert tx.payee == "123 MINSK"
        assert tx.mcc is None
        assert tx.location is None
        assert tx.comment is None
        assert tx.date == datetime(2024, 3, 3, 10, 0, tzinfo=timezone(timedelta(hours=3)))

    def test_regular_foreign_currency(self, byn_card):
        """Foreign purchases carry origin and a note."""
        api_tx = ApiTransaction(
            kind=REGULAR_TRANSACTION,
            payload=_regular(account_amount=-20, details="Retail AMAZON", currency="USD", amount=10, fee=0),
            card=byn_card,
        )
        tx = convert_api_transaction(api_tx)

        assert tx.posted == Amount(amount=Decimal("-20"), instrument="BYN")
        assert tx.origin == Amount(amount=Decimal("-10"), instrument="USD")
        assert tx.payee == "AMAZON"
        assert tx.comment == "10.00 USD = 20.00 BYN (rate 2.0000)"

    def test_unparsed_details_become_comment(self, byn_card):
        """Unrecognized details prefix the note."""
        api_tx = ApiTransaction(
            kind=REGULAR_TRANSACTION,
            payload=_regular(account_amount=-20, details="Monthly  fee", currency="USD", amount=10),
            card=byn_card,
        )
        tx = convert_api_transaction(api_tx)

        assert tx.payee is None
        assert tx.comment == "Monthly fee\n10.00 USD = 20.00 BYN (rate 2.0000)"

    def test_blank_details_give_null_comment(self, byn_card):
        """Blank details leave the comment empty."""
        api_tx = ApiTransaction(
            kind=REGULAR_TRANSACTION,
            payload=_regular(account_amount=-5, details="   "),
            card=byn_card,
        )
        assert convert_api_transaction(api_tx).comment is None

    def test_aborted_same_currency(self, byn_card):
        """Aborted records are holds."""
        api_tx = ApiTransaction(
            kind=ABORTED_TRANSACTION,
            payload=_aborted(trans_amount=30, details="Retail SHOP", amount=30),
            card=byn_card,
        )
        tx = convert_api_transaction(api_tx)

        assert tx.hold is True
        assert tx.posted == Amount(amount=Decimal("-30"), instrument="BYN")
        assert tx.origin is None
        assert tx.payee == "SHOP"

    def test_aborted_foreign_currency(self, byn_card):
        """Aborted foreign records post the account amount."""
        api_tx = ApiTransaction(
            kind=ABORTED_TRANSACTION,
            payload=_aborted(trans_amount=10, details="Retail SHOP", currency="USD", amount=21),
            card=byn_card,
        )
        tx = convert_api_transaction(api_tx)

        assert tx.posted == Amount(amount=Decimal("-21"), instrument="BYN")
        assert tx.origin == Amount(amount=Decimal("-10"), instrument="USD")
        assert tx.comment == "10.00 USD = 21.00 BYN (rate 2.1000)"

    @pytest.mark.parametrize(
        "trans_amount, amount, expected",
        [
            (10, 10, Decimal("-10")),
            (10, -10, Decimal("-10")),
            (-10, 10, Decimal("10")),
            (-10, -10, Decimal("10")),
        ],
    )
    def test_aborted_sign_ignores_account_amount_sign(self, byn_card, trans_amount, amount, expected):
        """Aborted direction follows transAmount only."""
        api_tx = ApiTransaction(
            kind=ABORTED_TRANSACTION,
            payload=_aborted(trans_amount=trans_amount, details="Retail SHOP", amount=amount),
            card=byn_card,
        )
        assert convert_api_transaction(api_tx).posted.amount == expected

    def test_corrupted_amount_propagates(self, byn_card):
        """CorruptedAmountError is not swallowed."""
        api_tx = ApiTransaction(
            kind=REGULAR_TRANSACTION,
            payload=_regular(account_amount=-3, details="Retail X", currency="EUR", amount=0, fee=0),
            card=byn_card,
        )
        with pytest.raises(CorruptedAmountError):
            convert_api_transaction(api_tx)

    def test_unknown_kind(self, byn_card):
        """Unsupported kinds raise with the kind name."""
        api_tx = ApiTransaction(
            kind="pendingTransaction",
            payload=_regular(account_amount=-1, details="Retail X"),
            card=byn_card,
        )
        with pytest.raises(UnsupportedTransactionKind) as exc_info:
            convert_api_transaction(api_tx)
        assert exc_info.value.kind == "pendingTransaction"


class TestRawTransactionDates:
    """Test timezone handling of transDate."""

    def test_naive_date_becomes_utc(self):
        """A transDate without an offset is read as UTC."""
        tx = _regular(account_amount=-1, details="Retail X", date="2024-03-01T00:00:00")
        assert tx.trans_date == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_aware_date_keeps_offset(self):
        """A transDate with an offset keeps it."""
        tx = _aborted(trans_amount=1, details="Retail X", date="2024-03-01T00:00:00+03:00")
        assert tx.trans_date.utcoffset() == timedelta(hours=3)
