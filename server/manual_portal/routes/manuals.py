"""Published manual detail and keyword search."""

from uuid import UUID

from fastapi import APIRouter, HTTPException

from ..catalog.categories import get_category_by_name
from ..models.manual import ManualDetailResponse, SearchResponse, is_pending_url
from ..services import manual_service

router = APIRouter()


@router.get("/manuals/{manual_id}", response_model=ManualDetailResponse)
async def get_manual(manual_id: UUID):
    manual = await manual_service.get_published_manual(manual_id)
    if manual is None:
        raise HTTPException(status_code=404, detail="マニュアルが見つかりません")

    category = get_category_by_name(manual.main_category)
    return ManualDetailResponse(
        **manual.model_dump(),
        category_slug=category.slug if category else None,
        category_label=category.label if category else None,
        is_pending=is_pending_url(manual.url),
    )


@router.get("/search", response_model=SearchResponse)
async def search_manuals(q: str = ""):
    """Search published manuals by title, category, subcategory or tag."""
    manuals = await manual_service.search_published(q)
    return SearchResponse(query=q.strip(), total=len(manuals), items=manuals)
