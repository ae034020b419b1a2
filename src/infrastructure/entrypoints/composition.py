"""
Composition Root: wire infrastructure adapters into the application use cases.

Shared by both entrypoints (FastAPI app and overview poller). Nothing here holds
request state; the adapters open their HTTP clients per call.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.application.research.forensic_research import ForensicResearchService
from src.application.research.json_completion import JsonCompletion
from src.application.services.quote_batch_fetcher import QuoteBatchFetcher
from src.application.use_cases.acquire_forensic_record import AcquireForensicRecordUseCase
from src.application.use_cases.build_ownership_graph import BuildOwnershipGraphUseCase
from src.application.use_cases.get_daily_suggestions import GetDailySuggestionsUseCase
from src.application.use_cases.get_macro_analysis import GetMacroAnalysisUseCase
from src.application.use_cases.get_market_news import GetMarketNewsUseCase
from src.application.use_cases.get_market_overview import GetMarketOverviewUseCase
from src.application.use_cases.get_market_page import GetMarketPageUseCase
from src.application.use_cases.get_market_pulse import GetMarketPulseUseCase
from src.application.use_cases.get_stock_analysis import GetStockAnalysisUseCase
from src.application.use_cases.get_stock_detail import GetStockDetailUseCase
from src.application.use_cases.search_stocks import SearchStocksUseCase
from src.domain.ports.observability_port import IObservabilityHandler
from src.domain.ports.quote_source_port import IQuoteSource
from src.infrastructure.config import Settings
from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter
from src.infrastructure.quote_data.yahoo_chart_adapter import YahooChartQuoteSource
from src.infrastructure.quote_data.yahoo_search_adapter import YahooSymbolSearch
from src.infrastructure.quote_data.yfinance_adapter import YFinanceQuoteSource
from src.infrastructure.web_search.firecrawl_adapter import FirecrawlWebSearch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Services:
    market_overview: GetMarketOverviewUseCase
    market_pulse: GetMarketPulseUseCase
    stock_detail: GetStockDetailUseCase
    search_stocks: SearchStocksUseCase
    market_news: GetMarketNewsUseCase
    ownership_graph: BuildOwnershipGraphUseCase
    stock_analysis: GetStockAnalysisUseCase
    daily_suggestions: GetDailySuggestionsUseCase
    macro_analysis: GetMacroAnalysisUseCase
    market_pages: GetMarketPageUseCase
    observability: Optional[IObservabilityHandler] = None


def build_quote_source(settings: Settings) -> IQuoteSource:
    if settings.quote_provider == "yfinance":
        return YFinanceQuoteSource()
    return YahooChartQuoteSource()


def bootstrap_secrets(settings: Settings) -> None:
    """Pull API keys from AWS Secrets Manager into the environment, if configured.

    Must run before Settings.from_env() is re-read and before any adapter that
    reads LANGFUSE_* is constructed.
    """
    if not settings.secrets_arn:
        return
    from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

    SecretsManagerAdapter(region=settings.aws_region).load_into_env(settings.secrets_arn)


def build_observability(settings: Settings) -> Optional[IObservabilityHandler]:
    if not settings.langfuse_enabled:
        return None
    from src.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler

    return LangfuseObservabilityHandler()


def build_services(settings: Settings) -> Services:
    quote_source = build_quote_source(settings)
    fetcher = QuoteBatchFetcher(quote_source)
    web_search = FirecrawlWebSearch(api_key=settings.firecrawl_api_key)
    observability = build_observability(settings)
    llm = BedrockChatAdapter(model_id=settings.bedrock_model_id, region=settings.aws_region)
    research = ForensicResearchService(web_search=web_search, llm=llm, observability=observability)
    completion = JsonCompletion(
        llm, observability=observability, timeout_seconds=settings.intelligence_timeout_seconds
    )
    logger.info("Quote provider: %s", settings.quote_provider)
    return Services(
        market_overview=GetMarketOverviewUseCase(quote_source, fetcher),
        market_pulse=GetMarketPulseUseCase(),
        stock_detail=GetStockDetailUseCase(fetcher),
        search_stocks=SearchStocksUseCase(YahooSymbolSearch(), quote_source),
        market_news=GetMarketNewsUseCase(web_search),
        ownership_graph=BuildOwnershipGraphUseCase(
            AcquireForensicRecordUseCase(
                research, timeout_seconds=settings.ownership_timeout_seconds
            )
        ),
        stock_analysis=GetStockAnalysisUseCase(fetcher, web_search, completion),
        daily_suggestions=GetDailySuggestionsUseCase(completion),
        macro_analysis=GetMacroAnalysisUseCase(completion, web_search=web_search),
        market_pages=GetMarketPageUseCase(web_search),
        observability=observability,
    )
