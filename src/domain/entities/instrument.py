"""
Domain entities for the static instrument universe.
Zero external dependencies: pure Python dataclasses and enums only.
"""

from dataclasses import dataclass
from enum import Enum


class CapBand(str, Enum):
    """Coarse market-capitalisation band, ordered from smallest to largest."""

    UNKNOWN = "Unknown"
    PENNY = "Penny"
    SMALL = "Small"
    MID = "Mid"
    LARGE = "Large"

    @property
    def rank(self) -> int:
        return list(CapBand).index(self)


@dataclass(frozen=True)
class Instrument:
    symbol: str
    display_name: str
    sector: str
    cap_band: CapBand
