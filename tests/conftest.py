import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import priorsync` and `import tests` work when running pytest from root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from priorsync.cards.models import CardDescription, RawCard  # noqa: E402
from tests.fixtures.sample_payloads import (  # noqa: E402
    aborted_payload,
    card_payload,
    description_payload,
    regular_payload,
)


@pytest.fixture
def byn_card():
    """Active BYN debit card with id 42."""
    return RawCard.model_validate(card_payload())


@pytest.fixture
def snapshot():
    """A card list with a reissued duplicate and mixed transactions, newest first."""
    cards = [
        card_payload(card_id=42, contract="C1", status=1, default_synonym="Visa Classic"),
        card_payload(card_id=77, contract="C1", status=0, default_synonym="Aaa old card", masked="5***********9999"),
        card_payload(card_id=43, contract="C2", status=1, default_synonym="Mastercard", masked="5***********5678"),
    ]
    descriptions = [
        description_payload(
            42,
            aborted=[
                aborted_payload(15, "Retail  COFFEE  BAR", date="2024-03-05T00:00:00+03:00", time="08:30:00"),
                aborted_payload(7, "Retail TAXI", date="2024-03-02T00:00:00+03:00", time="22:10:00"),
            ],
            regular=[
                regular_payload(-100, "P2P SDBO TO CARD 5678", date="2024-03-04T00:00:00+03:00", time="18:00:00"),
                regular_payload(-50, "ATM 123 MINSK", date="2024-03-03T00:00:00+03:00", time="10:00:00"),
                regular_payload(
                    -20, "Retail AMAZON", currency="USD", amount=10, date="2024-03-01T00:00:00+03:00", time="11:00:00"
                ),
            ],
        ),
        description_payload(77),
        description_payload(
            43,
            regular=[
                regular_payload(100, "P2P_SDBO FROM CARD 1234", date="2024-03-04T00:00:00+03:00", time="18:00:00"),
            ],
        ),
    ]
    return {"cards": cards, "cardDescriptions": descriptions}


@pytest.fixture
def snapshot_models(snapshot):
    cards = [RawCard.model_validate(c) for c in snapshot["cards"]]
    descriptions = [CardDescription.model_validate(d) for d in snapshot["cardDescriptions"]]
    return cards, descriptions
