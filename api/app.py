"""
FastAPI application factory for the fact store.

Usage:
    python -m api.app                    # Dev server on port 8000
    APP_DB_PATH=/data/facts.sqlite python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

The service is the persistent store behind the board client: it lists,
inserts and vote-increments facts, and publishes the category registry.
It does not authenticate users and does not validate fact content.
"""

import json
import logging
import re
import time
import uuid
from collections import defaultdict
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import database
from api.database import get_db_path, init_db
from api.routes import categories, facts
from utils.config import AppConfig

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "client_ip",
                    "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("fact_tavern_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)

# ── Rate limiting state ───────────────────────────────────────────────────────
# Buckets: every vote endpoint shares "vote", fact submission is "submit",
# anything else is limited per path.
_VOTE_PATH = re.compile(r"^/api/v1/facts/\d+/votes/[^/]+$")
_SUBMIT_PATH = "/api/v1/facts"
_RATE_LIMITS: dict[str, int] = {
    "vote":   _cfg.rate_limit_vote,
    "submit": _cfg.rate_limit_submit,
}
_DEFAULT_RATE_LIMIT = _cfg.rate_limit_default
_rate_counters: dict[str, dict[str, list]] = defaultdict(lambda: defaultdict(list))
_MAX_TRACKED_IPS = 10_000
_last_cleanup: float = 0.0
_CLEANUP_INTERVAL = 300.0  # 5 minutes


def _rate_bucket(method: str, path: str) -> str:
    """Map a request onto its rate-limit bucket name."""
    if method == "POST" and _VOTE_PATH.match(path):
        return "vote"
    if method == "POST" and path == _SUBMIT_PATH:
        return "submit"
    return path


def _cleanup_rate_counters() -> None:
    """Remove stale rate counter entries to bound memory usage."""
    global _last_cleanup
    now = time.time()
    if now - _last_cleanup < _CLEANUP_INTERVAL:
        return
    _last_cleanup = now
    window_start = now - 60.0
    to_delete = []
    for ip, buckets in _rate_counters.items():
        for bucket in list(buckets.keys()):
            buckets[bucket] = [t for t in buckets[bucket] if t > window_start]
            if not buckets[bucket]:
                del buckets[bucket]
        if not buckets:
            to_delete.append(ip)
    for ip in to_delete:
        del _rate_counters[ip]
    # If still over limit, evict the IPs with the fewest recent hits
    if len(_rate_counters) > _MAX_TRACKED_IPS:
        excess = len(_rate_counters) - _MAX_TRACKED_IPS
        quietest = sorted(
            _rate_counters.keys(),
            key=lambda ip: sum(len(v) for v in _rate_counters[ip].values()),
        )[:excess]
        for ip in quietest:
            del _rate_counters[ip]


def _get_client_ip(request: Request) -> str:
    """Return the real client IP, respecting X-Forwarded-For from trusted proxies."""
    direct_ip = request.client.host if request.client else "unknown"
    if not _cfg.trusted_proxies or direct_ip not in _cfg.trusted_proxies:
        return direct_ip
    xff = request.headers.get("X-Forwarded-For", "")
    if xff:
        # X-Forwarded-For: client, proxy1, proxy2 (leftmost is the client)
        real_ip = xff.split(",")[0].strip()
        if real_ip:
            return real_ip
    return direct_ip


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the facts schema on startup if the database is new."""
    db_path = init_db(get_db_path())
    _logger.info("fact store ready database=%s", db_path)
    yield


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Override the database path (useful for testing).

    Returns:
        Configured FastAPI application instance.
    """
    if db_path is not None:
        database.set_db_path(db_path)

    app = FastAPI(
        title="Fact Tavern API",
        summary="Persistent store for the community fact board.",
        description=(
            "## Fact Tavern API\n\n"
            "Stores short factual claims with a source link and a topic "
            "category, and counts three kinds of votes per claim: "
            "*interesting*, *mind-blowing* and *false*.\n\n"
            "### Rate limits\n"
            f"- Votes: {_cfg.rate_limit_vote} req/min per IP\n"
            f"- Fact submissions: {_cfg.rate_limit_submit} req/min per IP\n"
            f"- All other endpoints: {_cfg.rate_limit_default} req/min per IP\n\n"
            "Returns `429 Too Many Requests` with `Retry-After: 60` when exceeded."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "facts", "description": "List, submit and vote on facts."},
            {"name": "categories", "description": "The static category registry."},
            {"name": "meta", "description": "Health check."},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging + rate limiting middleware ────────────────────────────

    @app.middleware("http")
    async def log_and_rate_limit(request: Request, call_next):
        """Log each request and enforce per-IP rate limits."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        client_ip = _get_client_ip(request)
        path = request.url.path

        _cleanup_rate_counters()

        # Health check is not rate limited
        if path == "/health":
            return await call_next(request)

        bucket = _rate_bucket(request.method, path)
        limit = _RATE_LIMITS.get(bucket, _DEFAULT_RATE_LIMIT)
        now = time.time()
        window_start = now - 60.0
        hits = [t for t in _rate_counters[client_ip][bucket] if t > window_start]
        _rate_counters[client_ip][bucket] = hits
        if len(hits) >= limit:
            _logger.warning(
                "rate_limited ip=%s bucket=%s limit=%d", client_ip, bucket, limit
            )
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests", "status_code": 429},
                headers={"Retry-After": "60"},
            )
        hits.append(now)

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if _cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "client_ip": client_ip,
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f ip=%s rid=%s",
                request.method, path, response.status_code, duration_ms,
                client_ip, request_id,
            )
        return response

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.exception("unhandled error path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "status_code": 500,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"error": "Bad request", "detail": str(exc), "status_code": 400},
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if the API is running and can read the facts table."""
        db_path = get_db_path()
        if not db_path.exists():
            return JSONResponse(
                status_code=503,
                content={"status": "no_database", "database": str(db_path)},
            )
        try:
            conn = database._make_conn(db_path)
            try:
                count = conn.execute("SELECT COUNT(*) FROM facts").fetchone()[0]
            finally:
                conn.close()
        except Exception as e:
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "error": str(e)},
            )
        return {"status": "ok", "database": str(db_path), "facts": count}

    # ── Register routers ──────────────────────────────────────────────────────

    prefix = "/api/v1"
    app.include_router(facts.router,      prefix=prefix)
    app.include_router(categories.router, prefix=prefix)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
