"""Category browsing routes."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException

from ..catalog.categories import get_category_by_slug
from ..catalog.filters import is_known_audience, is_known_plan
from ..models.catalog import CategoryPage, CategorySummary
from ..services import manual_service
from ..services.category_view import build_category_page, list_category_summaries

router = APIRouter()


@router.get("", response_model=List[CategorySummary])
async def list_categories():
    """All categories in taxonomy order with their published manual counts."""
    counts = await manual_service.count_published_by_category()
    return list_category_summaries(counts)


@router.get("/{slug}", response_model=CategoryPage)
async def get_category_page(
    slug: str,
    audience: Optional[str] = None,
    plan: Optional[str] = None,
):
    """Grouped, filtered manuals for one category."""
    category = get_category_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="カテゴリが見つかりません")

    audience = audience or None
    plan = plan or None
    if audience and not is_known_audience(audience):
        raise HTTPException(status_code=400, detail=f"Unknown audience filter: {audience}")
    if plan and not is_known_plan(plan):
        raise HTTPException(status_code=400, detail=f"Unknown plan filter: {plan}")

    manuals = await manual_service.list_published_by_category(category.name)
    return build_category_page(category, manuals, audience, plan)
