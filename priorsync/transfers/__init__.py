"""Cash reclassification and transfer-leg merging."""

from priorsync.transfers.cash import as_cash_transfer
from priorsync.transfers.merge import merge_transfers

__all__ = ["as_cash_transfer", "merge_transfers"]
