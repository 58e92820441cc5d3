"""Compose category listings and the category page view model."""

from typing import Mapping, Optional, Sequence

from ..catalog.categories import CATEGORIES, Category
from ..catalog.filters import (
    AUDIENCE_TAGS,
    PLAN_TAGS,
    apply_filters,
    audience_tags_of,
    plan_tags_of,
    toggle_filter,
)
from ..catalog.grouping import ManualGroup, group_manuals
from ..catalog.steps import has_step_rules
from ..models.catalog import (
    CategoryPage,
    CategorySummary,
    FacetOption,
    ManualCard,
    ManualGroupView,
)
from ..models.manual import Manual, is_pending_url

SUBCATEGORY_PREVIEW_SIZE = 3
STEP_NAVIGATION_TITLE = "設定の流れ"
SECTION_NAVIGATION_TITLE = "カテゴリ内の項目"


def summarize_category(category: Category, manual_count: int = 0) -> CategorySummary:
    subcategories = list(category.subcategories)
    preview = subcategories[:SUBCATEGORY_PREVIEW_SIZE]
    return CategorySummary(
        key=category.key,
        name=category.name,
        label=category.label,
        slug=category.slug,
        description=category.description,
        icon_name=category.icon_name,
        subcategories=subcategories,
        subcategory_preview=preview,
        more_subcategory_count=len(subcategories) - len(preview),
        has_steps=has_step_rules(category.name),
        manual_count=manual_count,
    )


def list_category_summaries(counts: Optional[Mapping[str, int]] = None) -> list[CategorySummary]:
    """All categories in taxonomy order, with published manual counts by name."""
    counts = counts or {}
    return [
        summarize_category(category, counts.get(category.name, 0))
        for category in CATEGORIES.values()
    ]


def to_manual_card(manual: Manual) -> ManualCard:
    return ManualCard(
        id=manual.id,
        title=manual.title,
        url=manual.url,
        sub_category=manual.sub_category,
        is_pending=is_pending_url(manual.url),
        tags=list(manual.tags or []),
        audience_tags=audience_tags_of(manual),
        plan_tags=plan_tags_of(manual),
    )


def _group_view(group: ManualGroup) -> ManualGroupView:
    return ManualGroupView(
        key=group.key,
        anchor_id=group.anchor_id,
        sort_order=group.sort_order,
        is_step=group.is_step,
        count=len(group.manuals),
        manuals=[to_manual_card(manual) for manual in group.manuals],
    )


def _facet_options(values: Sequence[str], active: Optional[str]) -> list[FacetOption]:
    return [
        FacetOption(value=value, active=value == active, next_value=toggle_filter(active, value))
        for value in values
    ]


def build_category_page(
    category: Category,
    manuals: Sequence[Manual],
    audience_filter: Optional[str] = None,
    plan_filter: Optional[str] = None,
) -> CategoryPage:
    """Filter, group and shape one category's published manuals.

    ``manuals`` must already be restricted to the category and ordered by
    order_index; nothing here re-sorts manuals.
    """
    filtered = apply_filters(manuals, audience_filter, plan_filter)
    groups = group_manuals(filtered, category)
    step_mode = has_step_rules(category.name)

    return CategoryPage(
        category=summarize_category(category, len(manuals)),
        step_mode=step_mode,
        navigation_title=STEP_NAVIGATION_TITLE if step_mode else SECTION_NAVIGATION_TITLE,
        groups=[_group_view(group) for group in groups],
        audience_filter=audience_filter,
        plan_filter=plan_filter,
        active_filter_count=int(bool(audience_filter)) + int(bool(plan_filter)),
        audience_options=_facet_options(AUDIENCE_TAGS, audience_filter),
        plan_options=_facet_options(PLAN_TAGS, plan_filter),
        total_count=len(manuals),
        filtered_count=len(filtered),
    )
