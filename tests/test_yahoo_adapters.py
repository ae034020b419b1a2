import asyncio

import httpx
import pytest

from src.domain.errors import (
    MalformedPayloadError,
    QuoteDataError,
    SearchUnavailableError,
    SymbolNotFoundError,
    UpstreamQuoteError,
)
from src.infrastructure.quote_data.yahoo_chart_adapter import YahooChartQuoteSource, parse_chart_payload
from src.infrastructure.quote_data.yahoo_search_adapter import YahooSymbolSearch

CHART = {
    "chart": {
        "result": [
            {
                "meta": {
                    "symbol": "1155.KL",
                    "shortName": "MAYBANK",
                    "currency": "MYR",
                    "exchangeName": "KLS",
                    "regularMarketPrice": 10.2,
                    "chartPreviousClose": 10.0,
                    "regularMarketVolume": 12345,
                    "fiftyTwoWeekHigh": 10.9,
                },
                "timestamp": [1700000000, 1700000300],
                "indicators": {
                    "quote": [
                        {
                            "open": [10.0, 10.1],
                            "high": [10.1, 10.3],
                            "low": [9.9, 10.0],
                            "close": [10.1, 10.2],
                            "volume": [100, None],
                        }
                    ]
                },
            }
        ],
        "error": None,
    }
}


def chart_source(handler) -> YahooChartQuoteSource:
    return YahooChartQuoteSource(transport=httpx.MockTransport(handler))


def test_fetch_chart_maps_meta_and_series():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=CHART)

    raw = asyncio.run(chart_source(handler).fetch_chart("1155.KL", "5m", "1d"))

    assert seen["path"] == "/v8/finance/chart/1155.KL"
    assert seen["params"]["interval"] == "5m"
    assert seen["params"]["range"] == "1d"
    assert raw.display_name == "MAYBANK"
    assert raw.regular_market_price == 10.2
    assert raw.previous_close == 10.0
    assert raw.regular_market_volume == 12345.0
    assert raw.exchange_name == "KLS"
    assert raw.series.close == [10.1, 10.2]
    assert raw.series.volume == [100.0, None]


def test_empty_result_is_symbol_not_found():
    payload = {"chart": {"result": None, "error": {"code": "Not Found"}}}

    with pytest.raises(SymbolNotFoundError):
        parse_chart_payload("NOPE.KL", payload)


def test_non_chart_document_is_malformed():
    with pytest.raises(MalformedPayloadError):
        parse_chart_payload("X.KL", {"finance": {}})


@pytest.mark.parametrize(
    "result",
    [
        {"meta": ["x"]},
        {"meta": {}, "indicators": {"quote": {"close": [1.0]}}},
        {"meta": {}, "indicators": ["quote"]},
        {"meta": {}, "indicators": {"quote": ["close"]}},
        {"meta": {}, "indicators": {"quote": [{"close": 1.0}]}},
        {"meta": {}, "timestamp": 1700000000},
        "not a result",
    ],
)
def test_misshapen_chart_sections_are_malformed(result):
    with pytest.raises(MalformedPayloadError):
        parse_chart_payload("A.KL", {"chart": {"result": [result]}})


def test_result_that_is_not_a_list_is_malformed():
    with pytest.raises(QuoteDataError):
        parse_chart_payload("A.KL", {"chart": {"result": {"meta": {}}}})


def test_misshapen_chart_surfaces_as_domain_error_from_fetch():
    payload = {"chart": {"result": [{"meta": {"regularMarketPrice": 1.0}, "indicators": {"quote": {}}}]}}
    source = chart_source(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(MalformedPayloadError):
        asyncio.run(source.fetch_chart("A.KL", "5m", "1d"))


@pytest.mark.parametrize(
    "response,error",
    [
        (httpx.Response(404, json={"chart": {"result": None}}), SymbolNotFoundError),
        (httpx.Response(500, text="upstream broke"), UpstreamQuoteError),
        (httpx.Response(200, text="<html>rate limited</html>"), MalformedPayloadError),
    ],
)
def test_fetch_chart_error_mapping(response, error):
    with pytest.raises(error):
        asyncio.run(chart_source(lambda request: response).fetch_chart("X.KL", "1d", "5d"))


def test_transport_failure_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamQuoteError):
        asyncio.run(chart_source(handler).fetch_chart("X.KL", "1d", "5d"))


def test_symbol_search_reads_v1_results():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/finance/search"
        return httpx.Response(
            200,
            json={
                "quotes": [
                    {"symbol": "1155.KL", "shortname": "MAYBANK", "exchDisp": "Kuala Lumpur", "sector": "Financial Services"},
                    {"shortname": "no symbol"},
                ]
            },
        )

    matches = asyncio.run(YahooSymbolSearch(transport=httpx.MockTransport(handler)).search("maybank"))

    assert [(m.symbol, m.name, m.exchange, m.sector) for m in matches] == [
        ("1155.KL", "MAYBANK", "Kuala Lumpur", "Financial Services")
    ]


def test_symbol_search_falls_back_to_autocomplete():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v1/finance/search":
            return httpx.Response(429)
        return httpx.Response(
            200, json={"ResultSet": {"Result": [{"symbol": "5347.KL", "name": "TENAGA", "exchDisp": "KLS"}]}}
        )

    matches = asyncio.run(YahooSymbolSearch(transport=httpx.MockTransport(handler)).search("tenaga"))

    assert [m.symbol for m in matches] == ["5347.KL"]
    assert matches[0].type == "Equity"


def test_symbol_search_unavailable_when_both_endpoints_fail():
    search = YahooSymbolSearch(transport=httpx.MockTransport(lambda request: httpx.Response(503)))

    with pytest.raises(SearchUnavailableError):
        asyncio.run(search.search("x"))
