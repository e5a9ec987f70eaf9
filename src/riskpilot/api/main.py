"""
RiskPilot API

AI regulatory-risk analysis service.
"""

import json
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from riskpilot import __version__
from riskpilot.api.routes import analysis, options, regulations
from riskpilot.engine import RiskAnalysisEngine
from riskpilot.exceptions import RiskPilotError
from riskpilot.packs import load_knowledge_base


# =============================================================================
# Configuration (Environment Variables)
# =============================================================================

RP_LOG_LEVEL = os.getenv("RP_LOG_LEVEL", "INFO")
RP_CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("RP_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
RP_DOCS_ENABLED = os.getenv("RP_DOCS_ENABLED", "true").lower() == "true"


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    EXTRA_FIELDS = (
        "request_id",
        "method",
        "path",
        "status_code",
        "risk_score",
        "risk_level",
        "duration_ms",
    )

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in self.EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = RP_LOG_LEVEL) -> logging.Logger:
    """Attach the JSON handler to the `riskpilot` logger (once)."""
    root = logging.getLogger("riskpilot")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    return root


configure_logging()
logger = logging.getLogger("riskpilot.api")


# =============================================================================
# Lifespan
# =============================================================================

def build_engine() -> RiskAnalysisEngine:
    """
    Load the configured knowledge base and build the engine.

    Reads RP_KNOWLEDGE_BASE_DIR (bundled knowledge base when unset) and
    RP_STRICT_WEIGHTS at call time.
    """
    kb_dir = os.getenv("RP_KNOWLEDGE_BASE_DIR") or None
    strict_weights = os.getenv("RP_STRICT_WEIGHTS", "true").lower() == "true"

    kb = load_knowledge_base(kb_dir, strict_weights=strict_weights)
    logger.info(
        f"Loaded knowledge base from {kb.source}: "
        f"{len(kb.catalog.regions)} jurisdictions, "
        f"{kb.catalog.regulation_count} regulations, "
        f"{len(kb.rulebook.compliance_rules)} compliance rules, "
        f"{len(kb.rulebook.recommendation_rules)} recommendation rules"
    )
    return RiskAnalysisEngine.from_knowledge_base(kb)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the knowledge base on startup; refuse to start without it."""
    logger.info("Loading knowledge base...")
    try:
        engine = build_engine()
    except RiskPilotError as e:
        logger.critical(f"Failed to load knowledge base: {e}")
        raise

    # Share engine with routes
    analysis.set_engine(engine)
    regulations.set_engine(engine)
    options.set_loaded(True)

    logger.info("Ready to analyze AI risks")

    yield

    analysis.set_engine(None)
    regulations.set_engine(None)
    options.set_loaded(False)
    logger.info("Shutting down...")


# =============================================================================
# Application
# =============================================================================

def create_app() -> FastAPI:
    app = FastAPI(
        title="RiskPilot API",
        description="""
**AI regulatory-risk analysis engine.**

RiskPilot scores a proposed AI use case against the AI regulations of the
jurisdictions it will operate in and returns the applicable regulations,
mandatory requirements, a prioritized remediation plan and a compliance
timeline.

## Features

- **12 Jurisdictions**: EU, US federal, California, UK, China and more
- **Deterministic Scoring**: Same request = same score and tier
- **Declarative Rules**: Requirements and recommendations come from the rulebook
- **Citations**: Official sources, guidance and the supervising authority

## Quick Start

1. `GET /api/options` - See the form values
2. `GET /api/regulations` - See the covered jurisdictions
3. `POST /api/analyze` - Assess a use case
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if RP_DOCS_ENABLED else None,
        redoc_url="/redoc" if RP_DOCS_ENABLED else None,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=RP_CORS_ORIGINS,
        allow_credentials="*" not in RP_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add request ID to all requests and log their duration."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start = time.perf_counter()

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        logger.debug(
            "Request handled",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return response

    # Include routers
    app.include_router(options.router)
    app.include_router(analysis.router)
    app.include_router(regulations.router)

    @app.get("/", tags=["Health"], include_in_schema=False)
    async def root():
        return {
            "service": "RiskPilot API",
            "version": __version__,
            "status": "running",
            "docs": "/docs" if RP_DOCS_ENABLED else None,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("RP_HOST", "0.0.0.0"),
        port=int(os.getenv("RP_PORT", "3001")),
    )
