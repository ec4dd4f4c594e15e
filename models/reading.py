from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Reading:
    """Result of an advisory chain read (balance, gas price).

    Either holds a value or records why the value is unavailable, so the
    caller decides what "unavailable" means for it.
    """

    value: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: int) -> "Reading":
        return cls(value=int(value))

    @classmethod
    def unavailable(cls, error) -> "Reading":
        return cls(error=str(error))

    @property
    def available(self) -> bool:
        return self.value is not None

    def unwrap_or(self, default: int) -> int:
        return self.value if self.available else default
