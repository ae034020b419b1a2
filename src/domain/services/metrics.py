"""
Pure quote metrics: change %, volume ratio, cap band, and RawChart enrichment.
Zero external dependencies. Every function is total: missing inputs map to a
sentinel (0.0, None, CapBand.UNKNOWN) rather than an exception, except
enrich_quote, which rejects a chart that carries no price at all.
"""

from typing import Optional

from src.domain.entities.instrument import CapBand
from src.domain.entities.quote import IndexSnapshot, QuoteSnapshot, RawChart
from src.domain.errors import MalformedPayloadError

LARGE_CAP_THRESHOLD = 10_000_000_000
MID_CAP_THRESHOLD = 2_000_000_000
SMALL_CAP_THRESHOLD = 300_000_000

SPECULATIVE_VOLUME_RATIO = 3.0


def change_percent(price: Optional[float], previous_close: Optional[float]) -> float:
    if price is None or not previous_close:
        return 0.0
    return (price - previous_close) / previous_close * 100


def volume_ratio(
    volume: Optional[float], average_volume_3_month: Optional[float]
) -> Optional[float]:
    """Return volume / average volume, or None when the ratio is unavailable.

    None is the "unavailable" value: it is returned for a missing or zero
    average and must never be rendered as a number (see format_volume_ratio).
    """
    if not average_volume_3_month or volume is None:
        return None
    return volume / average_volume_3_month


def format_volume_ratio(ratio: Optional[float]) -> str:
    if ratio is None:
        return "N/A"
    return f"{ratio:.1f}x"


def classify_cap(market_cap: Optional[float]) -> CapBand:
    # A non-positive cap is what upstream reports when shares outstanding are unknown.
    if market_cap is None or market_cap <= 0:
        return CapBand.UNKNOWN
    if market_cap >= LARGE_CAP_THRESHOLD:
        return CapBand.LARGE
    if market_cap >= MID_CAP_THRESHOLD:
        return CapBand.MID
    if market_cap >= SMALL_CAP_THRESHOLD:
        return CapBand.SMALL
    return CapBand.PENNY


def detect_move_type(ratio: Optional[float], has_news: bool = False) -> str:
    if has_news:
        return "News Driven"
    if ratio is not None and ratio > SPECULATIVE_VOLUME_RATIO:
        return "Speculative"
    return "Technical"


def enrich_quote(raw: RawChart) -> QuoteSnapshot:
    """Derive a QuoteSnapshot from one chart response.

    ``average_volume_3_month`` is the mean of the non-null volumes in the
    returned series window; ``market_cap`` is price x shares outstanding when
    the latter is known.

    Raises:
        MalformedPayloadError: if the chart has no current price.
    """
    price = raw.regular_market_price
    if price is None:
        raise MalformedPayloadError(f"Chart for {raw.symbol!r} has no market price")

    volumes = [v for v in raw.series.volume if v is not None]
    average_volume = sum(volumes) / len(volumes) if volumes else None
    latest_volume = raw.regular_market_volume or (volumes[-1] if volumes else 0)
    previous_close = raw.previous_close

    return QuoteSnapshot(
        symbol=raw.symbol,
        display_name=raw.display_name,
        price=price,
        price_change=price - previous_close if previous_close is not None else 0.0,
        price_change_percent=change_percent(price, previous_close),
        volume=latest_volume,
        currency=raw.currency,
        average_volume_3_month=average_volume,
        market_cap=price * raw.shares_outstanding if raw.shares_outstanding else None,
        fifty_two_week_high=raw.fifty_two_week_high,
        fifty_two_week_low=raw.fifty_two_week_low,
    )


def index_snapshot(raw: RawChart) -> IndexSnapshot:
    price = raw.regular_market_price
    if price is None:
        raise MalformedPayloadError(f"Index chart for {raw.symbol!r} has no market price")
    previous_close = raw.previous_close
    return IndexSnapshot(
        price=price,
        change=price - previous_close if previous_close is not None else 0.0,
        change_percent=change_percent(price, previous_close),
    )
