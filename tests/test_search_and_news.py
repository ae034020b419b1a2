import asyncio

from src.application.use_cases.get_market_news import DEFAULT_NEWS_QUERY, GetMarketNewsUseCase
from src.application.use_cases.search_stocks import SearchStocksUseCase
from src.domain.entities.search import NewsArticle, SymbolMatch
from tests.fakes import FakeQuoteSource, FakeSymbolSearch, FakeWebSearch, make_chart


def test_search_keeps_only_bursa_listings():
    matches = [
        SymbolMatch("1155.KL", "MAYBANK"),
        SymbolMatch("MBBEF", "Malayan Banking", exchange="OTC"),
        SymbolMatch("TENAGA", "Tenaga Nasional", exchange="Kuala Lumpur"),
    ]
    use_case = SearchStocksUseCase(FakeSymbolSearch(matches), FakeQuoteSource())

    results = asyncio.run(use_case.execute("maybank"))

    assert [m.symbol for m in results] == ["1155.KL", "TENAGA"]


def test_search_falls_back_to_direct_code_lookup():
    source = FakeQuoteSource(charts={"5347.KL": make_chart("5347.KL")})
    use_case = SearchStocksUseCase(FakeSymbolSearch([]), source)

    results = asyncio.run(use_case.execute("5347"))

    assert [m.symbol for m in results] == ["5347.KL"]
    assert source.calls == [("5347.KL", "1d", "1d")]


def test_search_direct_lookup_miss_returns_nothing():
    use_case = SearchStocksUseCase(FakeSymbolSearch([]), FakeQuoteSource())

    assert asyncio.run(use_case.execute("zzzz")) == []


def test_blank_search_returns_nothing():
    source = FakeQuoteSource()

    assert asyncio.run(SearchStocksUseCase(FakeSymbolSearch(), source).execute("  ")) == []
    assert source.calls == []


def test_news_uses_default_query_for_last_day():
    search = FakeWebSearch(articles=[NewsArticle(title="KLCI up", url="https://example.com")])

    articles = asyncio.run(GetMarketNewsUseCase(search).execute())

    assert [a.title for a in articles] == ["KLCI up"]
    assert search.calls == [(DEFAULT_NEWS_QUERY, 10, "day")]


def test_news_passes_custom_query():
    search = FakeWebSearch()

    asyncio.run(GetMarketNewsUseCase(search).execute(" glove makers "))

    assert search.calls[0][0] == "glove makers"
