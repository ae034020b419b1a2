"""
Static registry of the Bursa Malaysia instruments covered by the market overview.
Read-only at runtime; the benchmark index symbol lives here as well.
"""

from typing import Optional

from src.domain.entities.instrument import CapBand, Instrument

BENCHMARK_INDEX_SYMBOL = "^KLSE"

BURSA_INSTRUMENTS: tuple[Instrument, ...] = (
    Instrument("1155.KL", "MAYBANK", "Finance", CapBand.LARGE),
    Instrument("1295.KL", "PBBANK", "Finance", CapBand.LARGE),
    Instrument("5347.KL", "TENAGA", "Utilities", CapBand.LARGE),
    Instrument("4863.KL", "TM", "Telecom", CapBand.LARGE),
    Instrument("3182.KL", "GENTING", "Consumer", CapBand.LARGE),
    Instrument("1023.KL", "CIMB", "Finance", CapBand.LARGE),
    Instrument("5285.KL", "SIMEPLT", "Plantation", CapBand.LARGE),
    Instrument("1961.KL", "IOI", "Plantation", CapBand.LARGE),
    Instrument("5183.KL", "PETGAS", "Energy", CapBand.LARGE),
    Instrument("4707.KL", "NESTLE", "Consumer", CapBand.LARGE),
    Instrument("5225.KL", "IHH", "Healthcare", CapBand.LARGE),
    Instrument("0166.KL", "INARI", "Technology", CapBand.MID),
    Instrument("7113.KL", "TOPGLOVE", "Healthcare", CapBand.MID),
    Instrument("6012.KL", "MAXIS", "Telecom", CapBand.MID),
    Instrument("5168.KL", "HARTALEGA", "Healthcare", CapBand.MID),
    Instrument("4715.KL", "GENM", "Consumer", CapBand.MID),
    Instrument("5218.KL", "SAPNRG", "Energy", CapBand.MID),
    Instrument("0138.KL", "MYEG", "Technology", CapBand.MID),
    Instrument("0128.KL", "FRONTKN", "Technology", CapBand.SMALL),
    Instrument("5243.KL", "VELESTO", "Energy", CapBand.SMALL),
    Instrument("0097.KL", "VITROX", "Technology", CapBand.SMALL),
    Instrument("5005.KL", "UNISEM", "Technology", CapBand.SMALL),
    Instrument("3867.KL", "MPI", "Technology", CapBand.SMALL),
    Instrument("5199.KL", "HIBISCUS", "Energy", CapBand.SMALL),
    Instrument("2445.KL", "KLK", "Plantation", CapBand.MID),
)


def find_instrument(
    symbol: str, instruments: tuple[Instrument, ...] = BURSA_INSTRUMENTS
) -> Optional[Instrument]:
    return next((i for i in instruments if i.symbol == symbol), None)
