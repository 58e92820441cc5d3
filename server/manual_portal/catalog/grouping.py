"""Partition a category's manuals into ordered display groups.

Categories with step rules are grouped by inferred step ("STEP2 給与情報の設定");
all others are grouped by subcategory in taxonomy order. Manuals that cannot
be placed land in the "その他" group, which always sorts last.
"""

import re
from dataclasses import dataclass, field
from typing import Sequence

from ..models.manual import Manual
from .categories import Category
from .steps import STEP_RULES, infer_step

OTHER_GROUP_KEY = "その他"
OTHER_SORT_ORDER = 999

_WHITESPACE_RUN = re.compile(r"\s+")
@dataclass
class ManualGroup:
    key: str
    sort_order: int
    manuals: list[Manual] = field(default_factory=list)
    # Set only for inferred steps; a free-text "STEP..." subcategory stays a plain section.
    is_step: bool = False

    @property
    def anchor_id(self) -> str:
        return "group-" + _WHITESPACE_RUN.sub("-", self.key)


def _step_group(category: Category, manual: Manual) -> tuple[str, int, bool]:
    step = infer_step(category.name, manual.sub_category)
    if step.step_number is None:
        return OTHER_GROUP_KEY, OTHER_SORT_ORDER, False
    return f"STEP{step.step_number} {step.step_name}", step.step_number, True


def _subcategory_group(category: Category, manual: Manual) -> tuple[str, int, bool]:
    # A category that declares "その他" itself keeps it at its declared position.
    key = manual.sub_category or OTHER_GROUP_KEY
    try:
        return key, category.subcategories.index(key), False
    except ValueError:
        return key, OTHER_SORT_ORDER, False


def group_manuals(manuals: Sequence[Manual], category: Category) -> list[ManualGroup]:
    """Group already-filtered manuals for one category.

    Manuals keep their input order inside each group (the caller supplies them
    sorted by order_index). Groups are sorted by sort order with a stable sort,
    so ties keep first-seen order. Only non-empty groups are returned.
    """
    if category.name in STEP_RULES:
        assign = _step_group
    else:
        assign = _subcategory_group

    groups: dict[str, ManualGroup] = {}
    for manual in manuals:
        key, sort_order, is_step = assign(category, manual)
        group = groups.get(key)
        if group is None:
            group = groups[key] = ManualGroup(key=key, sort_order=sort_order, is_step=is_step)
        group.manuals.append(manual)

    return sorted(groups.values(), key=lambda group: group.sort_order)
