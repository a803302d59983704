import logging

from fastapi import FastAPI, Depends, Response
from fastapi import HTTPException
from fastapi.middleware.cors import CORSMiddleware

from catalog_search import __version__
from catalog_search.core.config import settings
from catalog_search.db.catalog import Catalog, get_catalog
from catalog_search.schemas import (
    CategoriesResponse,
    HighlightRequest,
    HighlightResponse,
    RecentQueriesResponse,
    RecentQueryRequest,
    SearchItem,
    SearchRequest,
    SearchResponse,
    Segment,
)
from catalog_search.services.highlighter import highlight
from catalog_search.services.recent import RecentQueries, get_recent_queries

logger = logging.getLogger(__name__)

# Simple in-memory metrics
_metrics = {
    "requests_total": 0,
    "search_total": 0,
    "search_empty_total": 0,
    "highlight_total": 0,
    "categories_total": 0,
    "recent_saved_total": 0,
}


def get_catalog_dep() -> Catalog:
    try:
        return get_catalog()
    except (FileNotFoundError, ValueError) as e:
        logger.error("catalog unavailable: %s", e)
        raise HTTPException(status_code=503, detail="Catalog not available")


def get_recent_dep() -> RecentQueries:
    return get_recent_queries()


def _segments(query: str, text: str | None) -> list[Segment]:
    return [Segment(text=s.text, match=s.match) for s in highlight(query, text)]


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())
    app = FastAPI(title=settings.app_name, version=__version__)

    # CORS
    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.get("/")
    async def root():
        return {
            "service": settings.app_name,
            "version": __version__,
            "environment": settings.environment,
        }

    @app.get("/categories", response_model=CategoriesResponse)
    async def categories(catalog: Catalog = Depends(get_catalog_dep)):
        _metrics["requests_total"] += 1
        _metrics["categories_total"] += 1
        return {"categories": catalog.categories()}

    @app.post("/search", response_model=SearchResponse)
    async def search(payload: SearchRequest, catalog: Catalog = Depends(get_catalog_dep)):
        _metrics["requests_total"] += 1
        _metrics["search_total"] += 1
        ranked = catalog.rank(payload.query, payload.category, payload.sort)
        if not ranked:
            _metrics["search_empty_total"] += 1
        logger.debug("search q=%r category=%r sort=%s -> %d", payload.query, payload.category, payload.sort.value, len(ranked))
        return {
            "total": len(ranked),
            "items": [
                SearchItem(
                    id=m.record.id,
                    category=m.record.category,
                    tags=list(m.record.tags or ()),
                    score=m.score,
                    title=_segments(payload.query, m.record.title),
                    text=_segments(payload.query, m.record.text),
                )
                for m in ranked
            ],
        }

    @app.post("/highlight", response_model=HighlightResponse)
    async def highlight_text(payload: HighlightRequest):
        _metrics["requests_total"] += 1
        _metrics["highlight_total"] += 1
        return {"segments": _segments(payload.query, payload.text)}

    @app.get("/recent", response_model=RecentQueriesResponse)
    def recent(store: RecentQueries = Depends(get_recent_dep)):
        return {"items": store.items()}

    @app.post("/recent", response_model=RecentQueriesResponse)
    def save_recent(payload: RecentQueryRequest, store: RecentQueries = Depends(get_recent_dep)):
        _metrics["requests_total"] += 1
        if payload.query.strip():
            _metrics["recent_saved_total"] += 1
        return {"items": store.save(payload.query)}

    @app.delete("/recent", response_model=RecentQueriesResponse)
    def clear_recent(store: RecentQueries = Depends(get_recent_dep)):
        store.clear()
        return {"items": []}

    @app.get("/metrics")
    async def metrics() -> Response:
        lines = [
            "# HELP service_requests_total Total HTTP requests.",
            "# TYPE service_requests_total counter",
            f"service_requests_total {_metrics['requests_total']}",
            "# HELP search_requests_total Total search requests by outcome.",
            "# TYPE search_requests_total counter",
            f"search_requests_total{{outcome=\"any\"}} {_metrics['search_total']}",
            f"search_requests_total{{outcome=\"empty\"}} {_metrics['search_empty_total']}",
            "# HELP highlight_requests_total Total highlight requests.",
            "# TYPE highlight_requests_total counter",
            f"highlight_requests_total {_metrics['highlight_total']}",
            "# HELP categories_requests_total Total category list requests.",
            "# TYPE categories_requests_total counter",
            f"categories_requests_total {_metrics['categories_total']}",
            "# HELP recent_saved_total Total saved recent queries.",
            "# TYPE recent_saved_total counter",
            f"recent_saved_total {_metrics['recent_saved_total']}",
        ]
        return Response("\n".join(lines) + "\n", media_type="text/plain; version=0.0.4")

    return app


app = create_app()
