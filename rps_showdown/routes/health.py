"""
Health and status route handlers.
"""
from fastapi import APIRouter

from rps_showdown import __version__

router = APIRouter()

@router.get("/healthz")
def healthz():
    """Health check endpoint"""
    return {"ok": True, "version": __version__}
