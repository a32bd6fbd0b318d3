"""HTTP REST server for wordshield."""

import logging
import time
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from wordshield import __version__
from wordshield.engine import SensitiveWordFilter
from wordshield.dictionary import load_dictionary, WordDictionary

logger = logging.getLogger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "wordshield_requests_total",
    "Total requests",
    ["endpoint", "status"],
)
REQUEST_DURATION = Histogram(
    "wordshield_request_duration_seconds",
    "Request duration in seconds",
    ["endpoint"],
)
KEYWORD_MATCHES = Counter(
    "wordshield_keyword_matches_total",
    "Total sensitive word matches",
    ["endpoint"],
)


# Request/Response models
class FilterRequest(BaseModel):
    """Request model for /filter endpoint."""

    text: str
    redact: bool = True


class CheckRequest(BaseModel):
    """Request model for /check endpoint."""

    text: str


class FilterResponse(BaseModel):
    """Response model for /filter endpoint."""

    text: str
    keywords: list[str]
    count: int
    all_clear: bool


class CheckResponse(BaseModel):
    """Response model for /check endpoint."""

    ok: bool


class HealthResponse(BaseModel):
    """Response model for /health endpoint."""

    status: str
    version: str
    words_loaded: int
    namespaces: list[str]


class ReloadResponse(BaseModel):
    """Response model for /reload endpoint."""

    status: str
    version: int
    words_loaded: int


class WordShieldServer:
    """Server wrapper for managing state."""

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        """Initialize server with configuration."""
        self.config = config or {}
        self.dictionary: Optional[WordDictionary] = None
        self.filter: Optional[SensitiveWordFilter] = None
        self._load_dictionary()

    def _load_dictionary(self) -> None:
        """Load the dictionary and build a new filter from configuration."""
        dictionary_config = self.config.get("dictionary", {})
        filter_config = self.config.get("filter", {})
        paths = dictionary_config.get("paths")

        logger.info(f"Loading dictionary from: {paths}")
        dictionary = load_dictionary(paths=paths)
        word_filter = SensitiveWordFilter.from_dictionary(
            dictionary,
            fold_case=dictionary_config.get("fold_case", False),
            replacement=filter_config.get("replacement", "*"),
            window=filter_config.get("window"),
        )
        word_filter.set_neglect_words(filter_config.get("neglect_words", []))

        # Swap in only fully built state; scans in flight keep the old filter
        self.dictionary = dictionary
        self.filter = word_filter
        logger.info(f"Loaded {len(dictionary)} words")

    def reload_dictionary(self) -> dict[str, Any]:
        """Reload dictionary files and rebuild the filter."""
        try:
            old_version = self.dictionary.version if self.dictionary else 0
            self._load_dictionary()
            return {
                "status": "ok",
                "version": self.dictionary.version if self.dictionary else 0,
                "words_loaded": len(self.dictionary) if self.dictionary else 0,
                "message": f"Reloaded successfully (v{old_version} -> v{self.dictionary.version})",
            }
        except Exception as e:
            logger.error(f"Failed to reload dictionary: {e}")
            raise HTTPException(status_code=500, detail=f"Reload failed: {str(e)}")


def create_app(config: Optional[dict[str, Any]] = None) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        config: Server configuration dictionary

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="wordshield",
        description="Sensitive word detection and redaction service",
        version=__version__,
    )

    server = WordShieldServer(config)

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next: Any) -> Response:
        """Record metrics for each request."""
        start_time = time.time()
        endpoint = request.url.path

        response = await call_next(request)

        duration = time.time() - start_time
        REQUEST_COUNT.labels(endpoint=endpoint, status=response.status_code).inc()
        REQUEST_DURATION.labels(endpoint=endpoint).observe(duration)

        return response

    @app.post("/filter", response_model=FilterResponse)
    async def filter_text(request: FilterRequest) -> FilterResponse:
        """Redact sensitive words in text."""
        if server.filter is None:
            raise HTTPException(status_code=500, detail="Filter not initialized")

        try:
            result = server.filter.filter(request.text, redact=request.redact)
            KEYWORD_MATCHES.labels(endpoint="/filter").inc(result.match_count)

            return FilterResponse(
                text=result.text,
                keywords=result.matched_keywords,
                count=result.match_count,
                all_clear=result.all_clear,
            )
        except Exception as e:
            logger.error(f"Filter error: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @app.post("/check", response_model=CheckResponse)
    async def check(request: CheckRequest) -> CheckResponse:
        """Check whether text is free of sensitive words."""
        if server.filter is None:
            raise HTTPException(status_code=500, detail="Filter not initialized")

        try:
            ok = server.filter.every(request.text)
            if not ok:
                KEYWORD_MATCHES.labels(endpoint="/check").inc()
            return CheckResponse(ok=ok)
        except Exception as e:
            logger.error(f"Check error: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        if server.dictionary is None or server.filter is None:
            raise HTTPException(status_code=503, detail="Filter not initialized")

        return HealthResponse(
            status="healthy",
            version=__version__,
            words_loaded=len(server.dictionary),
            namespaces=list(server.dictionary.namespaces.keys()),
        )

    @app.post("/reload", response_model=ReloadResponse)
    async def reload() -> ReloadResponse:
        """Reload dictionary files."""
        result = server.reload_dictionary()
        return ReloadResponse(**result)

    @app.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8080)
