from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.schemas.common import ApiResponse
from immoauto.schemas.search import SearchResults, Suggestion
from immoauto.services import search as search_service

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=ApiResponse[SearchResults])
def search(
    query: str = "",
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
):
    properties, vehicles = search_service.search(db, query, page, limit)
    return {"success": True, "data": {"properties": properties, "vehicles": vehicles}}


@router.get("/suggestions", response_model=ApiResponse[list[Suggestion]])
def suggestions(query: str = "", db: Session = Depends(get_db)):
    return {"success": True, "data": search_service.suggestions(db, query)}
