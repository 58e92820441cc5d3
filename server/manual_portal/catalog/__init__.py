from .categories import (
    CATEGORIES,
    Category,
    get_all_category_pairs,
    get_category,
    get_category_by_name,
    get_category_by_slug,
    get_main_categories,
    get_sub_categories,
)
from .filters import (
    AUDIENCE_TAGS,
    PLAN_TAGS,
    SUGGESTED_TAGS,
    apply_filters,
    toggle_filter,
)
from .grouping import OTHER_GROUP_KEY, OTHER_SORT_ORDER, ManualGroup, group_manuals
from .steps import STEP_RULES, StepInfo, has_step_rules, infer_step

__all__ = [
    "CATEGORIES",
    "Category",
    "get_all_category_pairs",
    "get_category",
    "get_category_by_name",
    "get_category_by_slug",
    "get_main_categories",
    "get_sub_categories",
    "AUDIENCE_TAGS",
    "PLAN_TAGS",
    "SUGGESTED_TAGS",
    "apply_filters",
    "toggle_filter",
    "OTHER_GROUP_KEY",
    "OTHER_SORT_ORDER",
    "ManualGroup",
    "group_manuals",
    "STEP_RULES",
    "StepInfo",
    "has_step_rules",
    "infer_step",
]
