"""
FastAPI entry point: HTTP surface over the market, intelligence and ownership
use cases.

This module is the HTTP edge of the Composition Root: create_app() reads the
environment, wires all adapters via build_services() and maps domain errors to
status codes. There is no authentication layer.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:create_app --factory --reload --port 8000
"""

import dataclasses
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from src.application.services.forensic_payload import parse_forensic_payload
from src.domain.entities.market import MarketOverview
from src.domain.entities.ownership import GraphFilter
from src.domain.entities.payload import PayloadResult
from src.domain.errors import QuoteDataError, SearchUnavailableError, SymbolNotFoundError
from src.domain.services.ownership_graph import build_ownership_graph
from src.infrastructure.config import Settings
from src.infrastructure.entrypoints.composition import Services, bootstrap_secrets, build_services
from src.infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)


class OwnershipGraphRequest(BaseModel):
    record: dict[str, Any]
    filter: GraphFilter = GraphFilter.ALL


def _overview_body(overview: MarketOverview) -> dict:
    body = dataclasses.asdict(overview)
    body["status"] = overview.status
    return jsonable_encoder(body)


def _payload_body(result: PayloadResult, key: str) -> dict:
    return jsonable_encoder(
        {"status": result.status, "reason": result.reason, key: dataclasses.asdict(result.value)}
    )


def create_app(services: Optional[Services] = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        services: Pre-wired use cases (tests pass fakes). When omitted, the
                  environment (and .env) is read and real adapters are wired.
    """
    if services is None:
        load_dotenv()
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        if settings.secrets_arn:
            bootstrap_secrets(settings)
            settings = Settings.from_env()
        services = build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if services.observability is not None:
            services.observability.flush()

    app = FastAPI(title="Bursa Intelligence API", lifespan=lifespan)

    @app.get("/market/overview")
    async def market_overview():
        """Index, quotes and instrument registry for one refresh cycle."""
        return _overview_body(await services.market_overview.execute())

    @app.get("/market/pulse")
    async def market_pulse():
        """Ranked sector momentum, sector cloud layout and market movers."""
        overview = await services.market_overview.execute()
        pulse = services.market_pulse.execute(overview)
        return jsonable_encoder({"status": overview.status, **dataclasses.asdict(pulse)})

    @app.get("/market/suggestions")
    async def market_suggestions():
        """AI watchlist and trap list built from a fresh overview."""
        overview = await services.market_overview.execute()
        result = await services.daily_suggestions.execute(overview)
        return {"marketStatus": overview.status, **_payload_body(result, "suggestions")}

    @app.get("/market/macro")
    async def market_macro(context: Optional[str] = None):
        return _payload_body(await services.macro_analysis.execute(context), "macro")

    @app.get("/market/pages/{page}")
    async def market_page(page: str):
        """Bursa announcements or the KLSE screener, scraped to markdown."""
        try:
            scraped = await services.market_pages.execute(page)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except SearchUnavailableError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return dataclasses.asdict(scraped)

    @app.get("/stocks/{symbol}")
    async def stock_detail(
        symbol: str,
        interval: str = "5m",
        range_: str = Query("1d", alias="range"),
    ):
        try:
            detail = await services.stock_detail.execute(symbol, interval, range_)
        except SymbolNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except QuoteDataError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return jsonable_encoder(dataclasses.asdict(detail))

    @app.get("/stocks/{symbol}/analysis")
    async def stock_analysis(symbol: str):
        """AI opportunity and risk read of one symbol; degrades to a fallback analysis."""
        try:
            report = await services.stock_analysis.execute(symbol)
        except SymbolNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except QuoteDataError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return jsonable_encoder(
            {
                "quote": dataclasses.asdict(report.quote),
                "instrument": dataclasses.asdict(report.instrument) if report.instrument else None,
                "newsCount": report.news_count,
                **_payload_body(report.analysis, "analysis"),
            }
        )

    @app.get("/search")
    async def search(q: str = ""):
        try:
            matches = await services.search_stocks.execute(q)
        except SearchUnavailableError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return {"results": [dataclasses.asdict(m) for m in matches]}

    @app.get("/news")
    async def news(q: Optional[str] = None):
        try:
            articles = await services.market_news.execute(q)
        except SearchUnavailableError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return {"articles": [dataclasses.asdict(a) for a in articles]}

    @app.get("/ownership/{entity}/graph")
    async def ownership_graph(entity: str, filter: GraphFilter = GraphFilter.ALL):
        try:
            view = await services.ownership_graph.execute(entity, filter)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return jsonable_encoder(
            {
                "status": view.record.status,
                "reason": view.record.reason,
                "record": dataclasses.asdict(view.record.value),
                "graph": dataclasses.asdict(view.graph),
            }
        )

    @app.post("/ownership/graph")
    async def ownership_graph_from_record(body: OwnershipGraphRequest):
        """Lay out a caller-supplied ForensicRecord without contacting any collaborator."""
        entity = body.record.get("entity")
        name = str(entity.get("name") or "") if isinstance(entity, dict) else ""
        name = name.strip() or "Unknown entity"
        result = parse_forensic_payload(body.record, name)
        graph = build_ownership_graph(result.value, body.filter)
        return jsonable_encoder({"status": result.status, "graph": dataclasses.asdict(graph)})

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
