"""
Application service: validate untrusted market intelligence replies.

Same treatment as forensic_payload: the reply is decoded leniently, every score
is clamped to 0-100, every label is matched against its allowed set, and list
items that cannot be salvaged are dropped. A reply that carries none of the
fields its prompt asked for becomes a FALLBACK_DEFAULT result wrapping the
"Analysis unavailable" default.
"""

import logging
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator

from src.application.services.payload_coercion import (
    LenientModel,
    coerce_bool,
    coerce_choice,
    coerce_optional_str,
    coerce_score,
    decode_reply,
    string_list,
    validate_items,
)
from src.domain.entities.analysis import (
    CARD_ICONS,
    MACRO_DIRECTIONS,
    RISK_LEVELS,
    RISK_TRENDS,
    STOCK_BIASES,
    SUGGESTION_BIASES,
    TIME_HORIZONS,
    AnalysisCard,
    DailySuggestions,
    MacroAnalysis,
    MacroFactor,
    RiskMetrics,
    StockAnalysis,
    StockSuggestion,
    TrapWarning,
)
from src.domain.entities.payload import PayloadResult

logger = logging.getLogger(__name__)

_STOCK_ANALYSIS_FIELDS = (
    "opportunityScore",
    "probabilityPositive",
    "confidence",
    "cards",
    "riskMetrics",
    "keyReason",
)
_SUGGESTION_FIELDS = ("suggestions", "trapList", "marketSummary")
_MACRO_FIELDS = ("factors", "overallBias", "overallSummary")


def _required_text(value: Any) -> str:
    text = coerce_optional_str(value)
    if text is None:
        raise ValueError("value is required")
    return text


class _CardModel(LenientModel):
    category: str
    icon: str = "neutral"
    summary: str = ""
    probability: float = 0.0

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> str:
        return _required_text(value)

    @field_validator("icon", mode="before")
    @classmethod
    def _icon(cls, value: Any) -> str:
        return coerce_choice(value, CARD_ICONS, "neutral")

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> str:
        return coerce_optional_str(value) or ""

    @field_validator("probability", mode="before")
    @classmethod
    def _probability(cls, value: Any) -> float:
        return coerce_score(value)


class _RiskMetricsModel(LenientModel):
    volatility: float = 0.0
    liquidity_risk: float = Field(default=0.0, alias="liquidityRisk")
    governance_risk: float = Field(default=0.0, alias="governanceRisk")
    structural_exposure: float = Field(default=0.0, alias="structuralExposure")
    macro_sensitivity: float = Field(default=0.0, alias="macroSensitivity")
    max_drawdown: float = Field(default=0.0, alias="maxDrawdown")
    risk_trend: str = Field(default="Stable", alias="riskTrend")

    @field_validator(
        "volatility",
        "liquidity_risk",
        "governance_risk",
        "structural_exposure",
        "macro_sensitivity",
        "max_drawdown",
        mode="before",
    )
    @classmethod
    def _scores(cls, value: Any) -> float:
        return coerce_score(value)

    @field_validator("risk_trend", mode="before")
    @classmethod
    def _trend(cls, value: Any) -> str:
        return coerce_choice(value, RISK_TRENDS, "Stable")


class _StockAnalysisModel(LenientModel):
    opportunity_score: float = Field(default=0.0, alias="opportunityScore")
    probability_positive: float = Field(default=0.0, alias="probabilityPositive")
    confidence: float = 0.0
    risk_level: str = Field(default="Medium", alias="riskLevel")
    suggested_bias: str = Field(default="Hold", alias="suggestedBias")
    hidden_radar: bool = Field(default=False, alias="hiddenRadar")
    trap_flag: bool = Field(default=False, alias="trapFlag")
    trap_probability: float = Field(default=0.0, alias="trapProbability")
    key_reason: str = Field(default="", alias="keyReason")

    @field_validator(
        "opportunity_score", "probability_positive", "confidence", "trap_probability", mode="before"
    )
    @classmethod
    def _scores(cls, value: Any) -> float:
        return coerce_score(value)

    @field_validator("risk_level", mode="before")
    @classmethod
    def _risk(cls, value: Any) -> str:
        return coerce_choice(value, RISK_LEVELS, "Medium")

    @field_validator("suggested_bias", mode="before")
    @classmethod
    def _bias(cls, value: Any) -> str:
        return coerce_choice(value, STOCK_BIASES, "Hold")

    @field_validator("hidden_radar", "trap_flag", mode="before")
    @classmethod
    def _flags(cls, value: Any) -> bool:
        return coerce_bool(value)

    @field_validator("key_reason", mode="before")
    @classmethod
    def _reason(cls, value: Any) -> str:
        return coerce_optional_str(value) or ""


class _SuggestionModel(LenientModel):
    symbol: str
    name: str = ""
    confidence: float = 0.0
    risk_level: str = Field(default="Medium", alias="riskLevel")
    bias: str = "Watch"
    key_reason: str = Field(default="", alias="keyReason")
    risk_triggers: str = Field(default="", alias="riskTriggers")
    opportunity_score: float = Field(default=0.0, alias="opportunityScore")
    hidden_radar: bool = Field(default=False, alias="hiddenRadar")
    trap_flag: bool = Field(default=False, alias="trapFlag")

    @field_validator("symbol", mode="before")
    @classmethod
    def _symbol(cls, value: Any) -> str:
        return _required_text(value).upper()

    @field_validator("name", "key_reason", "risk_triggers", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_optional_str(value) or ""

    @field_validator("confidence", "opportunity_score", mode="before")
    @classmethod
    def _scores(cls, value: Any) -> float:
        return coerce_score(value)

    @field_validator("risk_level", mode="before")
    @classmethod
    def _risk(cls, value: Any) -> str:
        return coerce_choice(value, RISK_LEVELS, "Medium")

    @field_validator("bias", mode="before")
    @classmethod
    def _bias(cls, value: Any) -> str:
        return coerce_choice(value, SUGGESTION_BIASES, "Watch")

    @field_validator("hidden_radar", "trap_flag", mode="before")
    @classmethod
    def _flags(cls, value: Any) -> bool:
        return coerce_bool(value)


class _TrapModel(LenientModel):
    symbol: str
    name: str = ""
    trap_probability: float = Field(default=0.0, alias="trapProbability")
    manipulation_risk: str = Field(default="Medium", alias="manipulationRisk")
    reason: str = ""

    @field_validator("symbol", mode="before")
    @classmethod
    def _symbol(cls, value: Any) -> str:
        return _required_text(value).upper()

    @field_validator("name", "reason", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_optional_str(value) or ""

    @field_validator("trap_probability", mode="before")
    @classmethod
    def _probability(cls, value: Any) -> float:
        return coerce_score(value)

    @field_validator("manipulation_risk", mode="before")
    @classmethod
    def _risk(cls, value: Any) -> str:
        return coerce_choice(value, RISK_LEVELS, "Medium")


class _MacroFactorModel(LenientModel):
    factor: str
    direction: str = "Neutral"
    impact_strength: float = Field(default=0.0, alias="impactStrength")
    sector_exposure: list[str] = Field(default_factory=list, alias="sectorExposure")
    time_horizon: str = Field(default="Short", alias="timeHorizon")
    summary: str = ""

    @field_validator("factor", mode="before")
    @classmethod
    def _factor(cls, value: Any) -> str:
        return _required_text(value)

    @field_validator("direction", mode="before")
    @classmethod
    def _direction(cls, value: Any) -> str:
        return coerce_choice(value, MACRO_DIRECTIONS, "Neutral")

    @field_validator("impact_strength", mode="before")
    @classmethod
    def _impact(cls, value: Any) -> float:
        return coerce_score(value)

    @field_validator("sector_exposure", mode="before")
    @classmethod
    def _sectors(cls, value: Any) -> list[str]:
        # a lone sector name is common enough to keep
        if isinstance(value, str):
            value = [value]
        return string_list(value)

    @field_validator("time_horizon", mode="before")
    @classmethod
    def _horizon(cls, value: Any) -> str:
        return coerce_choice(value, TIME_HORIZONS, "Short")

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> str:
        return coerce_optional_str(value) or ""


def _decode(payload: Any, fields: tuple[str, ...], what: str) -> tuple[Optional[dict], Optional[str]]:
    """Decode *payload*; a document carrying none of *fields* is unusable."""
    document, reason = decode_reply(payload)
    if document is not None and not any(document.get(key) is not None for key in fields):
        reason = f"Reply carries no {what} fields"
        if document.get("error"):
            reason = f"{reason} (error: {str(document['error'])[:200]})"
        document = None
    return document, reason


def _model(model: type[LenientModel], raw: Any, what: str) -> Any:
    try:
        return model.model_validate(raw if isinstance(raw, dict) else {})
    except ValidationError as exc:
        logger.warning("Malformed %s: %s", what, exc)
        return model()


def parse_stock_analysis(payload: Any, symbol: str = "") -> PayloadResult[StockAnalysis]:
    """Turn a raw analysis reply into a PayloadResult[StockAnalysis].

    Args:
        payload: Decoded JSON (dict) or the raw reply text.
        symbol:  Used in log lines only.
    """
    document, reason = _decode(payload, _STOCK_ANALYSIS_FIELDS, "stock analysis")
    if document is None:
        logger.warning("Unusable stock analysis for %s: %s", symbol or "?", reason)
        return PayloadResult.fallback(StockAnalysis(), reason or "Unreadable reply")

    head = _model(_StockAnalysisModel, document, "stock analysis")
    metrics = _model(_RiskMetricsModel, document.get("riskMetrics"), "risk metrics")
    cards = validate_items(_CardModel, document.get("cards"), "cards")
    return PayloadResult.parsed(
        StockAnalysis(
            opportunity_score=head.opportunity_score,
            probability_positive=head.probability_positive,
            confidence=head.confidence,
            risk_level=head.risk_level,
            suggested_bias=head.suggested_bias,
            hidden_radar=head.hidden_radar,
            trap_flag=head.trap_flag,
            trap_probability=head.trap_probability,
            cards=[
                AnalysisCard(
                    category=c.category,
                    icon=c.icon,
                    summary=c.summary,
                    probability=c.probability,
                )
                for c in cards
            ],
            risk_metrics=RiskMetrics(
                volatility=metrics.volatility,
                liquidity_risk=metrics.liquidity_risk,
                governance_risk=metrics.governance_risk,
                structural_exposure=metrics.structural_exposure,
                macro_sensitivity=metrics.macro_sensitivity,
                max_drawdown=metrics.max_drawdown,
                risk_trend=metrics.risk_trend,
            ),
            key_reason=head.key_reason,
        )
    )


def parse_daily_suggestions(payload: Any) -> PayloadResult[DailySuggestions]:
    document, reason = _decode(payload, _SUGGESTION_FIELDS, "suggestion")
    if document is None:
        logger.warning("Unusable daily suggestions: %s", reason)
        return PayloadResult.fallback(DailySuggestions(), reason or "Unreadable reply")

    suggestions = validate_items(_SuggestionModel, document.get("suggestions"), "suggestions")
    traps = validate_items(_TrapModel, document.get("trapList"), "trapList")
    return PayloadResult.parsed(
        DailySuggestions(
            suggestions=[
                StockSuggestion(
                    symbol=s.symbol,
                    name=s.name,
                    confidence=s.confidence,
                    risk_level=s.risk_level,
                    bias=s.bias,
                    key_reason=s.key_reason,
                    risk_triggers=s.risk_triggers,
                    opportunity_score=s.opportunity_score,
                    hidden_radar=s.hidden_radar,
                    trap_flag=s.trap_flag,
                )
                for s in suggestions
            ],
            trap_list=[
                TrapWarning(
                    symbol=t.symbol,
                    name=t.name,
                    trap_probability=t.trap_probability,
                    manipulation_risk=t.manipulation_risk,
                    reason=t.reason,
                )
                for t in traps
            ],
            market_summary=coerce_optional_str(document.get("marketSummary")) or "",
        )
    )


def parse_macro_analysis(payload: Any) -> PayloadResult[MacroAnalysis]:
    document, reason = _decode(payload, _MACRO_FIELDS, "macro")
    if document is None:
        logger.warning("Unusable macro analysis: %s", reason)
        return PayloadResult.fallback(MacroAnalysis(), reason or "Unreadable reply")

    factors = validate_items(_MacroFactorModel, document.get("factors"), "factors")
    return PayloadResult.parsed(
        MacroAnalysis(
            factors=[
                MacroFactor(
                    factor=f.factor,
                    direction=f.direction,
                    impact_strength=f.impact_strength,
                    sector_exposure=f.sector_exposure,
                    time_horizon=f.time_horizon,
                    summary=f.summary,
                )
                for f in factors
            ],
            overall_bias=coerce_choice(document.get("overallBias"), MACRO_DIRECTIONS, "Neutral"),
            overall_summary=coerce_optional_str(document.get("overallSummary")) or "",
        )
    )
