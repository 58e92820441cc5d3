from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel


class CategorySummary(BaseModel):
    key: str
    name: str
    label: str
    slug: str
    description: str
    icon_name: str
    subcategories: List[str]
    subcategory_preview: List[str]
    more_subcategory_count: int
    has_steps: bool
    manual_count: int = 0


class ManualCard(BaseModel):
    id: UUID
    title: str
    url: str
    sub_category: Optional[str] = None
    is_pending: bool
    tags: List[str]
    audience_tags: List[str]
    plan_tags: List[str]


class ManualGroupView(BaseModel):
    key: str
    anchor_id: str
    sort_order: int
    is_step: bool
    count: int
    manuals: List[ManualCard]


class FacetOption(BaseModel):
    value: str
    active: bool
    next_value: Optional[str] = None


class CategoryPage(BaseModel):
    category: CategorySummary
    step_mode: bool
    navigation_title: str
    groups: List[ManualGroupView]
    audience_filter: Optional[str] = None
    plan_filter: Optional[str] = None
    active_filter_count: int
    audience_options: List[FacetOption]
    plan_options: List[FacetOption]
    total_count: int
    filtered_count: int


class TaxonomyCategory(BaseModel):
    key: str
    name: str
    label: str
    slug: str
    subcategories: List[str]
    has_steps: bool


class TaxonomyResponse(BaseModel):
    categories: List[TaxonomyCategory]
    suggested_tags: List[str]
    audience_tags: List[str]
    plan_tags: List[str]


class AdminStatsResponse(BaseModel):
    manual_count: int
    published_count: int
    category_count: int
    request_counts: dict[str, int]
