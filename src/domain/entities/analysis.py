"""
Domain entities for AI-generated market intelligence: single-stock analysis,
daily watchlist suggestions and macro outlook.
Zero external dependencies: pure Python dataclasses only.

These values come from an untrusted language model. They are built only by
src.application.services.intelligence_payload, which clamps every score to
0-100 and every label to its allowed set, and are always handed out wrapped
in a PayloadResult.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.domain.entities.instrument import Instrument
from src.domain.entities.payload import PayloadResult
from src.domain.entities.quote import QuoteSnapshot

UNAVAILABLE_SUMMARY = "Analysis unavailable"

RISK_LEVELS = ("Low", "Medium", "High")
STOCK_BIASES = ("Conditional Buy", "Hold", "Sell")
SUGGESTION_BIASES = ("Conditional Buy", "Hold", "Watch")
CARD_ICONS = ("positive", "neutral", "negative")
RISK_TRENDS = ("Improving", "Stable", "Deteriorating")
MACRO_DIRECTIONS = ("Bullish", "Bearish", "Neutral")
TIME_HORIZONS = ("Short", "Medium")


@dataclass(frozen=True)
class AnalysisCard:
    category: str
    icon: str = "neutral"
    summary: str = ""
    probability: float = 0.0


@dataclass(frozen=True)
class RiskMetrics:
    volatility: float = 0.0
    liquidity_risk: float = 0.0
    governance_risk: float = 0.0
    structural_exposure: float = 0.0
    macro_sensitivity: float = 0.0
    max_drawdown: float = 0.0
    risk_trend: str = "Stable"


@dataclass(frozen=True)
class StockAnalysis:
    opportunity_score: float = 0.0
    probability_positive: float = 0.0
    confidence: float = 0.0
    risk_level: str = "Medium"
    suggested_bias: str = "Hold"
    hidden_radar: bool = False
    trap_flag: bool = False
    trap_probability: float = 0.0
    cards: list[AnalysisCard] = field(default_factory=list)
    risk_metrics: RiskMetrics = field(default_factory=RiskMetrics)
    key_reason: str = UNAVAILABLE_SUMMARY


@dataclass(frozen=True)
class StockAnalysisReport:
    """The quote the analysis was run on, alongside the analysis itself."""

    quote: QuoteSnapshot
    instrument: Optional[Instrument]
    analysis: PayloadResult[StockAnalysis]
    news_count: int = 0


@dataclass(frozen=True)
class StockSuggestion:
    symbol: str
    name: str = ""
    confidence: float = 0.0
    risk_level: str = "Medium"
    bias: str = "Watch"
    key_reason: str = ""
    risk_triggers: str = ""
    opportunity_score: float = 0.0
    hidden_radar: bool = False
    trap_flag: bool = False


@dataclass(frozen=True)
class TrapWarning:
    symbol: str
    name: str = ""
    trap_probability: float = 0.0
    manipulation_risk: str = "Medium"
    reason: str = ""


@dataclass(frozen=True)
class DailySuggestions:
    suggestions: list[StockSuggestion] = field(default_factory=list)
    trap_list: list[TrapWarning] = field(default_factory=list)
    market_summary: str = UNAVAILABLE_SUMMARY


@dataclass(frozen=True)
class MacroFactor:
    factor: str
    direction: str = "Neutral"
    impact_strength: float = 0.0
    sector_exposure: list[str] = field(default_factory=list)
    time_horizon: str = "Short"
    summary: str = ""


@dataclass(frozen=True)
class MacroAnalysis:
    factors: list[MacroFactor] = field(default_factory=list)
    overall_bias: str = "Neutral"
    overall_summary: str = UNAVAILABLE_SUMMARY
