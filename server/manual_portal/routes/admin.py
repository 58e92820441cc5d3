"""Admin backend: dashboard stats, manual CRUD and request handling."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException

from ..catalog.categories import CATEGORIES
from ..catalog.filters import AUDIENCE_TAGS, PLAN_TAGS, SUGGESTED_TAGS
from ..catalog.steps import has_step_rules
from ..models.catalog import AdminStatsResponse, TaxonomyCategory, TaxonomyResponse
from ..models.manual import (
    Manual,
    ManualCreate,
    ManualListResponse,
    ManualSort,
    ManualStatusFilter,
    ManualUpdate,
)
from ..models.manual_request import (
    ManualRequest,
    ManualRequestListResponse,
    ManualRequestUpdate,
    RequestStatus,
)
from ..services import manual_service, request_service
from ..services.manual_service import UnknownCategoryError
from ..services.request_service import UnknownManualError

router = APIRouter()


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats():
    total, published = await manual_service.count_manuals()
    request_counts = await request_service.count_requests_by_status()
    return AdminStatsResponse(
        manual_count=total,
        published_count=published,
        category_count=len(CATEGORIES),
        request_counts=request_counts,
    )


@router.get("/taxonomy", response_model=TaxonomyResponse)
async def get_taxonomy():
    """Category and tag choices for the manual authoring forms."""
    return TaxonomyResponse(
        categories=[
            TaxonomyCategory(
                key=category.key,
                name=category.name,
                label=category.label,
                slug=category.slug,
                subcategories=list(category.subcategories),
                has_steps=has_step_rules(category.name),
            )
            for category in CATEGORIES.values()
        ],
        suggested_tags=list(SUGGESTED_TAGS),
        audience_tags=list(AUDIENCE_TAGS),
        plan_tags=list(PLAN_TAGS),
    )


# -----------------------------------------------------------------------------
# Manuals
# -----------------------------------------------------------------------------

@router.get("/manuals", response_model=ManualListResponse)
async def list_manuals(
    q: Optional[str] = None,
    main_category: Optional[str] = None,
    sub_category: Optional[str] = None,
    tag: Optional[str] = None,
    status: Optional[ManualStatusFilter] = None,
    sort: ManualSort = ManualSort.ORDER_INDEX,
):
    manuals = await manual_service.list_manuals()
    filtered = manual_service.apply_admin_filters(
        manuals,
        query=q,
        main_category=main_category,
        sub_category=sub_category,
        tag=tag,
        status=status,
        sort=sort,
    )
    return ManualListResponse(items=filtered, total=len(filtered))


@router.post("/manuals", response_model=Manual, status_code=201)
async def create_manual(manual: ManualCreate):
    try:
        return await manual_service.create_manual(manual)
    except UnknownCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/manuals/{manual_id}", response_model=Manual)
async def get_manual(manual_id: UUID):
    manual = await manual_service.get_manual(manual_id)
    if manual is None:
        raise HTTPException(status_code=404, detail="Manual not found")
    return manual


@router.patch("/manuals/{manual_id}", response_model=Manual)
async def update_manual(manual_id: UUID, manual: ManualUpdate):
    try:
        updated = await manual_service.update_manual(manual_id, manual)
    except UnknownCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail="Manual not found")
    return updated


@router.delete("/manuals/{manual_id}")
async def delete_manual(manual_id: UUID):
    deleted = await manual_service.delete_manual(manual_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Manual not found")
    return {"status": "deleted"}


# -----------------------------------------------------------------------------
# Manual requests
# -----------------------------------------------------------------------------

@router.get("/requests", response_model=ManualRequestListResponse)
async def list_requests(status: Optional[RequestStatus] = None):
    requests = await request_service.list_requests(status)
    return ManualRequestListResponse(items=requests, total=len(requests))


@router.get("/requests/{request_id}", response_model=ManualRequest)
async def get_request(request_id: UUID):
    request = await request_service.get_request(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return request


@router.patch("/requests/{request_id}", response_model=ManualRequest)
async def update_request(request_id: UUID, update: ManualRequestUpdate):
    try:
        request = await request_service.update_request(request_id, update)
    except UnknownManualError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if request is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return request
