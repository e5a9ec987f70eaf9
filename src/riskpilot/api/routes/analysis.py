"""Risk analysis endpoint."""

import logging
import time
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from riskpilot.api.schemas.requests import AnalyzeRequest
from riskpilot.engine import RiskAnalysisEngine
from riskpilot.exceptions import AnalysisError

router = APIRouter(prefix="/api", tags=["Analysis"])

logger = logging.getLogger(__name__)

# Shared engine instance (set by main.py)
engine: Optional[RiskAnalysisEngine] = None


def set_engine(e: Optional[RiskAnalysisEngine]):
    global engine
    engine = e


@router.post("/analyze")
async def analyze(body: AnalyzeRequest, request: Request):
    """
    Assess an AI use case.

    Returns the risk score and tier, the component breakdown, applicable
    regulations with provisions and penalties, mandatory requirements,
    prioritized recommendations, a compliance timeline and regulatory
    references.
    """
    if engine is None:
        raise HTTPException(status_code=503, detail="Knowledge base not loaded")

    request_id = getattr(request.state, "request_id", None)
    start = time.perf_counter()

    try:
        result = engine.analyze(body.model_dump(by_alias=True))
    except AnalysisError as e:
        logger.exception(
            "Analysis failed: %s",
            e.details.get("error", e.message),
            extra={"request_id": request_id},
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Analysis failed",
                "details": e.details.get("error", e.message),
            },
        )

    logger.info(
        "Analysis complete",
        extra={
            "request_id": request_id,
            "risk_score": result.risk_score,
            "risk_level": result.risk_level.value,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        },
    )
    return result.to_dict()
