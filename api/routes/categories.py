"""
Category registry endpoint.

GET /api/v1/categories  → the static category list, in display order
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models import CategoryOut
from board.categories import CATEGORIES

router = APIRouter(prefix="/categories", tags=["categories"])

_CACHE_HEADER = {"Cache-Control": "public, max-age=3600"}


@router.get("", response_model=list[CategoryOut], summary="List categories")
def list_categories() -> JSONResponse:
    """Return every category with its display color."""
    data = [{"name": c.name, "color": c.color} for c in CATEGORIES]
    return JSONResponse(content=data, headers=_CACHE_HEADER)
