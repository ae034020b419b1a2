import json

import pytest

from src.application.services.intelligence_payload import (
    parse_daily_suggestions,
    parse_macro_analysis,
    parse_stock_analysis,
)
from src.domain.entities.analysis import (
    UNAVAILABLE_SUMMARY,
    DailySuggestions,
    MacroAnalysis,
    StockAnalysis,
)
from src.domain.entities.payload import PayloadStatus

ANALYSIS = {
    "opportunityScore": "82",
    "probabilityPositive": 140,
    "confidence": -5,
    "riskLevel": "high",
    "suggestedBias": "Strong Buy",
    "hiddenRadar": "yes",
    "trapFlag": False,
    "trapProbability": "nan",
    "cards": [
        {"category": "Catalyst Strength", "icon": "POSITIVE", "summary": "Contract win", "probability": 75},
        {"category": "Trap Risk", "icon": "alarming", "probability": "20%"},
        {"icon": "negative"},
        "junk",
    ],
    "riskMetrics": {"volatility": 55, "liquidityRisk": "30", "riskTrend": "deteriorating", "maxDrawdown": None},
    "keyReason": "  Breakout on volume  ",
}


def test_stock_analysis_is_clamped_and_normalized():
    result = parse_stock_analysis(ANALYSIS, "A.KL")
    analysis = result.value

    assert result.status is PayloadStatus.PARSED
    assert analysis.opportunity_score == 82.0
    assert analysis.probability_positive == 100.0
    assert analysis.confidence == 0.0
    assert analysis.risk_level == "High"
    assert analysis.suggested_bias == "Hold"
    assert analysis.hidden_radar is True
    assert analysis.trap_probability == 0.0
    assert [(c.category, c.icon) for c in analysis.cards] == [
        ("Catalyst Strength", "positive"),
        ("Trap Risk", "neutral"),
    ]
    assert analysis.cards[1].probability == 20.0
    assert analysis.risk_metrics.liquidity_risk == 30.0
    assert analysis.risk_metrics.max_drawdown == 0.0
    assert analysis.risk_metrics.risk_trend == "Deteriorating"
    assert analysis.key_reason == "Breakout on volume"


def test_stock_analysis_tolerates_misshapen_sections():
    result = parse_stock_analysis({"opportunityScore": 60, "cards": "none", "riskMetrics": [1, 2]})

    assert result.status is PayloadStatus.PARSED
    assert result.value.cards == []
    assert result.value.risk_metrics.risk_trend == "Stable"


def test_stock_analysis_reads_fenced_reply_text():
    text = "Here you go:\n```json\n" + json.dumps({"keyReason": "Dividend play"}) + "\n```"

    result = parse_stock_analysis(text)

    assert result.status is PayloadStatus.PARSED
    assert result.value.key_reason == "Dividend play"


@pytest.mark.parametrize(
    "payload",
    [
        "I cannot analyze this stock.",
        ["not", "an", "object"],
        {"error": "Failed to parse AI response", "raw": "..."},
        {"opportunityScore": None, "cards": None},
        {},
    ],
)
def test_unusable_stock_analysis_falls_back(payload):
    result = parse_stock_analysis(payload)

    assert result.status is PayloadStatus.FALLBACK_DEFAULT
    assert result.value == StockAnalysis()
    assert result.value.key_reason == UNAVAILABLE_SUMMARY
    assert result.reason


def test_error_reply_reason_names_the_error():
    result = parse_macro_analysis({"error": "quota exceeded"})

    assert "quota exceeded" in result.reason


def test_daily_suggestions_drop_unusable_items():
    result = parse_daily_suggestions(
        {
            "suggestions": [
                {"symbol": "5347.kl", "name": "TENAGA", "confidence": 88, "bias": "conditional buy", "trapFlag": "no"},
                {"name": "No symbol"},
                {"symbol": "1155.KL", "bias": "Sell", "riskLevel": "extreme"},
            ],
            "trapList": [{"symbol": "0001.KL", "trapProbability": 250, "manipulationRisk": "HIGH"}, None],
            "marketSummary": "Rotation into utilities.",
        }
    )
    value = result.value

    assert result.status is PayloadStatus.PARSED
    assert [s.symbol for s in value.suggestions] == ["5347.KL", "1155.KL"]
    assert value.suggestions[0].bias == "Conditional Buy"
    assert value.suggestions[0].trap_flag is False
    assert value.suggestions[1].bias == "Watch"
    assert value.suggestions[1].risk_level == "Medium"
    assert value.trap_list[0].trap_probability == 100.0
    assert value.trap_list[0].manipulation_risk == "High"
    assert value.market_summary == "Rotation into utilities."


def test_unreadable_daily_suggestions_use_empty_default():
    result = parse_daily_suggestions("```json\n{broken\n```")

    assert result.status is PayloadStatus.FALLBACK_DEFAULT
    assert result.value == DailySuggestions(suggestions=[], trap_list=[], market_summary=UNAVAILABLE_SUMMARY)


def test_macro_analysis_normalizes_factors():
    result = parse_macro_analysis(
        {
            "factors": [
                {
                    "factor": "Palm Oil",
                    "direction": "bullish",
                    "impactStrength": "65",
                    "sectorExposure": "Plantation",
                    "timeHorizon": "Long",
                },
                {"factor": "  ", "direction": "Bearish"},
            ],
            "overallBias": "sideways",
            "overallSummary": "Commodities supportive.",
        }
    )
    factor, = result.value.factors

    assert result.status is PayloadStatus.PARSED
    assert factor.direction == "Bullish"
    assert factor.impact_strength == 65.0
    assert factor.sector_exposure == ["Plantation"]
    assert factor.time_horizon == "Short"
    assert result.value.overall_bias == "Neutral"
    assert result.value.overall_summary == "Commodities supportive."


def test_unreadable_macro_analysis_uses_neutral_default():
    result = parse_macro_analysis("no json here")

    assert result.status is PayloadStatus.FALLBACK_DEFAULT
    assert result.value == MacroAnalysis(factors=[], overall_bias="Neutral", overall_summary=UNAVAILABLE_SUMMARY)
