from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TxOutcome:
    success: bool
    tx_hash: Optional[str] = None
    status: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_receipt(cls, tx_hash: str, status: int) -> "TxOutcome":
        error = None if status == 1 else f"reverted (status {status})"
        return cls(success=status == 1, tx_hash=tx_hash, status=status, error=error)

    @classmethod
    def failed(cls, error, tx_hash=None) -> "TxOutcome":
        return cls(success=False, tx_hash=tx_hash, error=str(error))

    @classmethod
    def skipped(cls) -> "TxOutcome":
        """Nothing had to be sent, the desired state already holds."""
        return cls(success=True)

    def __bool__(self):
        return self.success
