"""Service status and form option endpoints."""

from fastapi import APIRouter

from riskpilot import __version__
from riskpilot.api.data.form_options import FORM_OPTIONS

router = APIRouter(prefix="/api", tags=["Options"])

# Set by main.py once the knowledge base is loaded
knowledge_bases_loaded = False


def set_loaded(loaded: bool):
    global knowledge_bases_loaded
    knowledge_bases_loaded = loaded


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "operational",
        "knowledgeBasesLoaded": knowledge_bases_loaded,
        "version": __version__,
    }


@router.get("/options")
async def get_options():
    """Values and labels for the assessment form."""
    return FORM_OPTIONS
