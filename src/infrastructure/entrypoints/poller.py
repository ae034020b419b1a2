"""
Polling scheduler for the market overview.

The computation core never schedules itself: each refresh is a single
request/response call. This module owns the timer. It runs one overview cycle
every interval, retries a cycle a bounded number of times when the upstream
looks fully down, and hands each snapshot to a callback.

Run:
    python -m src.infrastructure.entrypoints.poller
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from dotenv import load_dotenv

from src.application.use_cases.get_market_overview import GetMarketOverviewUseCase
from src.application.use_cases.get_market_pulse import GetMarketPulseUseCase
from src.domain.entities.market import MarketOverview
from src.domain.services.metrics import format_volume_ratio
from src.infrastructure.config import Settings
from src.infrastructure.entrypoints.composition import bootstrap_secrets, build_services
from src.infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)

SnapshotHandler = Callable[[MarketOverview], Awaitable[None]]


class MarketOverviewPoller:
    RETRY_DELAY_SECONDS: float = 2.0

    def __init__(
        self,
        use_case: GetMarketOverviewUseCase,
        on_snapshot: SnapshotHandler,
        interval_seconds: float = 60.0,
        max_retries: int = 1,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._use_case = use_case
        self._on_snapshot = on_snapshot
        self._interval_seconds = interval_seconds
        self._max_retries = max_retries
        self._sleep = sleep

    async def run_once(self) -> MarketOverview:
        """Run one cycle, retrying while every quote fetch fails."""
        overview = await self._use_case.execute()
        attempt = 0
        while overview.status == "unavailable" and attempt < self._max_retries:
            attempt += 1
            logger.warning("No quotes this cycle, retry %d/%d", attempt, self._max_retries)
            await self._sleep(self.RETRY_DELAY_SECONDS)
            overview = await self._use_case.execute()
        await self._on_snapshot(overview)
        return overview

    async def run(self, stop: Optional[asyncio.Event] = None, max_cycles: Optional[int] = None) -> int:
        """Poll until *stop* is set or *max_cycles* cycles have run. Returns cycles run.

        A cycle that raises is logged and skipped; the next one runs on schedule.
        Setting *stop* ends the wait between cycles immediately.
        """
        cycles = 0
        while not (stop and stop.is_set()):
            try:
                await self.run_once()
            except Exception:
                logger.exception("Overview cycle %d failed", cycles + 1)
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            await self._wait(stop)
        return cycles

    async def _wait(self, stop: Optional[asyncio.Event]) -> None:
        if stop is None:
            await self._sleep(self._interval_seconds)
            return
        try:
            await asyncio.wait_for(stop.wait(), timeout=self._interval_seconds)
        except asyncio.TimeoutError:
            pass


def _log_snapshot_factory(pulse: GetMarketPulseUseCase) -> SnapshotHandler:
    async def log_snapshot(overview: MarketOverview) -> None:
        index = overview.index
        logger.info(
            "KLCI %s | quotes %d/%d | %s",
            f"{index.price:,.2f} ({index.change_percent:+.2f}%)" if index else "N/A",
            len(overview.quotes),
            len(overview.instruments),
            overview.status,
        )
        summary = pulse.execute(overview)
        for sector in summary.sectors:
            logger.info(
                "  %-12s %+6.2f%%  n=%d  top=%s",
                sector.sector,
                sector.average_change_percent,
                sector.member_count,
                sector.top_volume_instrument,
            )
        for mover in summary.movers.volume_leaders:
            logger.info(
                "  vol %-10s %s %s", mover.name, format_volume_ratio(mover.volume_ratio), mover.move_type
            )

    return log_snapshot


def main() -> None:
    load_dotenv()
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    if settings.secrets_arn:
        bootstrap_secrets(settings)
        settings = Settings.from_env()
    services = build_services(settings)
    poller = MarketOverviewPoller(
        services.market_overview,
        _log_snapshot_factory(services.market_pulse),
        interval_seconds=settings.poll_interval_seconds,
        max_retries=settings.poll_max_retries,
    )
    try:
        asyncio.run(poller.run())
    except KeyboardInterrupt:
        logger.info("Poller stopped")
    finally:
        if services.observability is not None:
            services.observability.flush()


if __name__ == "__main__":
    main()
