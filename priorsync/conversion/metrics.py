"""
Conversion run metrics.

Counts what one conversion run saw and produced, so each run can be
summarized in a single log event.
"""

from typing import Dict, Any, Optional
from datetime import datetime
from dataclasses import dataclass, asdict


@dataclass
class ConversionMetrics:
    """Metrics for a single conversion run."""

    started_at: datetime
    ended_at: Optional[datetime] = None

    # Card counts
    cards_received: int = 0
    cards_evicted: int = 0
    accounts_produced: int = 0

    # Transaction counts
    aborted_transactions: int = 0
    regular_transactions: int = 0
    cash_reclassified: int = 0
    transfers_merged: int = 0
    records_produced: int = 0

    duration_seconds: float = 0.0

    def complete(self, ended_at: datetime) -> None:
        """Mark the run as finished."""
        self.ended_at = ended_at
        self.duration_seconds = (ended_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        data["ended_at"] = self.ended_at.isoformat() if self.ended_at else None
        return data
