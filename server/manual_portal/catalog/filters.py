"""Facet filters applied to a category's manuals before grouping.

Two facets exist: audience (who the manual is for) and plan (the freee
subscription tier it applies to). Each facet is single-select; selecting the
active value again clears it.
"""

from typing import Iterable, Optional, Sequence

from ..models.manual import Manual

AUDIENCE_TAGS: tuple[str, ...] = ("管理者向け", "従業員向け")
PLAN_TAGS: tuple[str, ...] = (
    "ミニマム",
    "スターター",
    "スタンダード",
    "プロフェッショナル",
    "アドバンス",
)
SUGGESTED_TAGS: tuple[str, ...] = AUDIENCE_TAGS + PLAN_TAGS


def is_known_audience(value: str) -> bool:
    return value in AUDIENCE_TAGS


def is_known_plan(value: str) -> bool:
    return value in PLAN_TAGS


def _has_tag(manual: Manual, tag: str) -> bool:
    return tag in (manual.tags or ())


def apply_filters(
    manuals: Sequence[Manual],
    audience_filter: Optional[str] = None,
    plan_filter: Optional[str] = None,
) -> list[Manual]:
    """Keep manuals carrying every active facet tag, in input order."""
    filtered: list[Manual] = []
    for manual in manuals:
        if audience_filter and not _has_tag(manual, audience_filter):
            continue
        if plan_filter and not _has_tag(manual, plan_filter):
            continue
        filtered.append(manual)
    return filtered


def toggle_filter(active: Optional[str], selected: str) -> Optional[str]:
    """Selecting the active value clears the facet; anything else selects it."""
    if active == selected:
        return None
    return selected


def _recognized(tags: Optional[Iterable[str]], allowed: tuple[str, ...]) -> list[str]:
    return [tag for tag in (tags or ()) if tag in allowed]


def audience_tags_of(manual: Manual) -> list[str]:
    return _recognized(manual.tags, AUDIENCE_TAGS)


def plan_tags_of(manual: Manual) -> list[str]:
    return _recognized(manual.tags, PLAN_TAGS)
