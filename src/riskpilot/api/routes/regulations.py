"""Regulatory catalog and framework endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from riskpilot.api.schemas.requests import SearchRequest
from riskpilot.engine import RiskAnalysisEngine
from riskpilot.exceptions import RegionNotFoundError

router = APIRouter(prefix="/api", tags=["Regulations"])

# Shared engine instance (set by main.py)
engine: Optional[RiskAnalysisEngine] = None


def set_engine(e: Optional[RiskAnalysisEngine]):
    global engine
    engine = e


def _engine() -> RiskAnalysisEngine:
    if engine is None:
        raise HTTPException(status_code=503, detail="Knowledge base not loaded")
    return engine


@router.get("/regulations")
async def list_regions():
    """Summary of every region: code, name, primary regulation and regulation count."""
    return _engine().list_regions()


@router.get("/regulations/{region}")
async def get_region(region: str):
    """Full regulation document for a region code (case-insensitive, e.g. 'eu')."""
    try:
        return _engine().get_region(region)
    except RegionNotFoundError:
        return JSONResponse(status_code=404, content={"error": "Region not found"})


@router.get("/framework")
async def get_framework():
    """The risk framework: scoring factors, risk levels and the requirement matrix."""
    return _engine().framework_document()


@router.post("/search")
async def search(body: SearchRequest):
    """
    Search regulations for a phrase.

    Plain case-insensitive substring match over each regulation document;
    results are in catalog order.
    """
    results = _engine().search(body.query)
    return {"query": body.query, "results": results, "count": len(results)}
