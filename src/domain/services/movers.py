"""
Market movers: top gainers, top losers and unusual-volume leaders for one cycle.
"""

from typing import Iterable

from src.domain.entities.instrument import CapBand, Instrument
from src.domain.entities.market import MarketMover, MarketMovers
from src.domain.entities.quote import QuoteSnapshot
from src.domain.services.metrics import classify_cap, detect_move_type, volume_ratio

DEFAULT_MOVERS_LIMIT = 5


def _to_mover(quote: QuoteSnapshot, instrument: Instrument | None) -> MarketMover:
    ratio = volume_ratio(quote.volume, quote.average_volume_3_month)
    cap_band = classify_cap(quote.market_cap)
    if cap_band is CapBand.UNKNOWN and instrument is not None:
        cap_band = instrument.cap_band
    return MarketMover(
        symbol=quote.symbol,
        name=instrument.display_name if instrument else quote.display_name,
        sector=instrument.sector if instrument else "Unknown",
        change_percent=quote.price_change_percent,
        volume_ratio=ratio,
        cap_band=cap_band,
        move_type=detect_move_type(ratio),
    )


def rank_movers(
    quotes: Iterable[QuoteSnapshot],
    instruments: Iterable[Instrument],
    limit: int = DEFAULT_MOVERS_LIMIT,
) -> MarketMovers:
    by_symbol = {i.symbol: i for i in instruments}
    movers = [_to_mover(q, by_symbol.get(q.symbol)) for q in quotes]

    gainers = sorted(
        (m for m in movers if m.change_percent > 0),
        key=lambda m: m.change_percent,
        reverse=True,
    )
    losers = sorted(
        (m for m in movers if m.change_percent < 0),
        key=lambda m: m.change_percent,
    )
    # movers without a usable ratio cannot rank on unusual volume
    volume_leaders = sorted(
        (m for m in movers if m.volume_ratio is not None),
        key=lambda m: m.volume_ratio,
        reverse=True,
    )
    return MarketMovers(
        gainers=gainers[:limit],
        losers=losers[:limit],
        volume_leaders=volume_leaders[:limit],
    )
