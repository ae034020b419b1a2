"""
Tagged result for payloads supplied by untrusted collaborators (scrapers, LLMs).
Zero external dependencies: pure Python dataclasses only.

A PayloadResult is either PARSED (the payload validated) or FALLBACK_DEFAULT (a
structurally valid default was substituted). Callers can always use ``value``;
``status`` tells them how much to trust it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class PayloadStatus(str, Enum):
    PARSED = "parsed"
    FALLBACK_DEFAULT = "fallback_default"


@dataclass(frozen=True)
class PayloadResult(Generic[T]):
    status: PayloadStatus
    value: T
    reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.status is PayloadStatus.FALLBACK_DEFAULT

    @classmethod
    def parsed(cls, value: T) -> "PayloadResult[T]":
        return cls(status=PayloadStatus.PARSED, value=value)

    @classmethod
    def fallback(cls, value: T, reason: str) -> "PayloadResult[T]":
        return cls(status=PayloadStatus.FALLBACK_DEFAULT, value=value, reason=reason)
