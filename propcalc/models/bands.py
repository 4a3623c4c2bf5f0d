"""Lookup-table row types shared across calculator categories."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class RateBand:
    """Indicative lender pricing for loans up to ``max_ltv`` percent."""
    max_ltv: Optional[Decimal]  # None for the open-ended top band
    min_rate: Decimal
    max_rate: Decimal
    label: str

    def covers(self, ltv: Decimal) -> bool:
        return self.max_ltv is None or ltv <= self.max_ltv


@dataclass(frozen=True)
class CostRange:
    low: Decimal
    high: Decimal

    def pick(self, high_estimate: bool) -> Decimal:
        return self.high if high_estimate else self.low

    @property
    def mid(self) -> Decimal:
        return (self.low + self.high) / 2


def band_for(bands: tuple[RateBand, ...], ltv: Decimal) -> Optional[RateBand]:
    """First band whose ceiling covers ``ltv``."""
    for band in bands:
        if band.covers(ltv):
            return band
    return None
