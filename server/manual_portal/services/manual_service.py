"""Manual persistence and admin-side list handling."""

import json
import logging
from typing import Any, Optional, Sequence
from uuid import UUID

from ..catalog.categories import get_category_by_name
from ..catalog.steps import infer_step
from ..database import get_connection
from ..models.manual import (
    PENDING_MANUAL_URL,
    Manual,
    ManualCreate,
    ManualSort,
    ManualStatusFilter,
    ManualUpdate,
    ReferenceLinkInput,
)
from .reference_links import merge_reference_links

logger = logging.getLogger(__name__)

MANUAL_COLUMNS = """
    id, title, url, main_category, sub_category, tags, reference_links,
    is_published, order_index, step_number, step_name, created_at, updated_at
"""


class UnknownCategoryError(ValueError):
    """Raised when a manual names a main category outside the taxonomy."""


def _row_to_manual(row: Any) -> Manual:
    data = dict(row)
    links = data.get("reference_links")
    if isinstance(links, str):
        links = json.loads(links)
    data["reference_links"] = links or []
    data["tags"] = list(data.get("tags") or [])
    return Manual(**data)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _clean_tags(tags: Sequence[str]) -> list[str]:
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def _links_json(links: Sequence[ReferenceLinkInput]) -> Optional[str]:
    merged = merge_reference_links(links)
    if not merged:
        return None
    return json.dumps([link.model_dump() for link in merged], ensure_ascii=False)


def _require_category(main_category: str) -> None:
    if get_category_by_name(main_category) is None:
        raise UnknownCategoryError(f"Unknown main category: {main_category}")


# -----------------------------------------------------------------------------
# Consumer-facing reads (published only)
# -----------------------------------------------------------------------------

async def list_published_by_category(main_category: str) -> list[Manual]:
    """Published manuals of one main category, ordered by order_index."""
    async with get_connection() as conn:
        rows = await conn.fetch(
            f"""
            SELECT {MANUAL_COLUMNS}
            FROM manuals
            WHERE main_category = $1 AND is_published = true
            ORDER BY order_index ASC, created_at ASC, id ASC
            """,
            main_category,
        )
    return [_row_to_manual(row) for row in rows]


async def get_published_manual(manual_id: UUID) -> Optional[Manual]:
    async with get_connection() as conn:
        row = await conn.fetchrow(
            f"SELECT {MANUAL_COLUMNS} FROM manuals WHERE id = $1 AND is_published = true",
            manual_id,
        )
    return _row_to_manual(row) if row else None


async def search_published(query: str) -> list[Manual]:
    """Keyword search over title, categories and exact tags."""
    query = query.strip()
    async with get_connection() as conn:
        if not query:
            rows = await conn.fetch(
                f"""
                SELECT {MANUAL_COLUMNS}
                FROM manuals
                WHERE is_published = true
                ORDER BY order_index ASC, created_at ASC, id ASC
                """
            )
        else:
            rows = await conn.fetch(
                f"""
                SELECT {MANUAL_COLUMNS}
                FROM manuals
                WHERE is_published = true
                  AND (
                    title ILIKE $1
                    OR main_category ILIKE $1
                    OR sub_category ILIKE $1
                    OR $2 = ANY(tags)
                  )
                ORDER BY order_index ASC, created_at ASC, id ASC
                """,
                f"%{_escape_like(query)}%",
                query,
            )
    logger.info("[Manuals] Search %r matched %d manuals", query, len(rows))
    return [_row_to_manual(row) for row in rows]


async def count_published_by_category() -> dict[str, int]:
    async with get_connection() as conn:
        rows = await conn.fetch(
            """
            SELECT main_category, COUNT(*) AS manual_count
            FROM manuals
            WHERE is_published = true
            GROUP BY main_category
            """
        )
    return {row["main_category"]: row["manual_count"] for row in rows}


# -----------------------------------------------------------------------------
# Admin CRUD
# -----------------------------------------------------------------------------

async def list_manuals() -> list[Manual]:
    async with get_connection() as conn:
        rows = await conn.fetch(
            f"SELECT {MANUAL_COLUMNS} FROM manuals ORDER BY order_index ASC, created_at ASC, id ASC"
        )
    return [_row_to_manual(row) for row in rows]


async def get_manual(manual_id: UUID) -> Optional[Manual]:
    async with get_connection() as conn:
        row = await conn.fetchrow(
            f"SELECT {MANUAL_COLUMNS} FROM manuals WHERE id = $1",
            manual_id,
        )
    return _row_to_manual(row) if row else None


async def count_manuals() -> tuple[int, int]:
    """Return (total, published) manual counts."""
    async with get_connection() as conn:
        row = await conn.fetchrow(
            """
            SELECT COUNT(*) AS total,
                   COUNT(*) FILTER (WHERE is_published) AS published
            FROM manuals
            """
        )
    return row["total"], row["published"]


async def create_manual(data: ManualCreate) -> Manual:
    _require_category(data.main_category)
    step = infer_step(data.main_category, data.sub_category)
    tags = _clean_tags(data.tags)

    async with get_connection() as conn:
        row = await conn.fetchrow(
            f"""
            INSERT INTO manuals (
                title, url, main_category, sub_category, tags, reference_links,
                is_published, order_index, step_number, step_name
            )
            VALUES ($1, $2, $3, $4, $5, $6::jsonb, $7, $8, $9, $10)
            RETURNING {MANUAL_COLUMNS}
            """,
            data.title,
            data.url,
            data.main_category,
            data.sub_category,
            tags or None,
            _links_json(data.reference_links),
            data.is_published,
            data.order_index,
            step.step_number,
            step.step_name,
        )
    manual = _row_to_manual(row)
    logger.info("[Manuals] Created manual %s in %s", manual.id, manual.main_category)
    return manual


async def update_manual(manual_id: UUID, data: ManualUpdate) -> Optional[Manual]:
    """Apply a partial update. Returns None when the manual does not exist."""
    changes = data.model_dump(exclude_unset=True)

    async with get_connection() as conn:
        current_row = await conn.fetchrow(
            f"SELECT {MANUAL_COLUMNS} FROM manuals WHERE id = $1",
            manual_id,
        )
        if not current_row:
            return None
        current = _row_to_manual(current_row)

        main_category = changes.get("main_category") or current.main_category
        if "main_category" in changes:
            _require_category(main_category)

        if "sub_category" in changes:
            sub_category = changes["sub_category"]
            if sub_category is not None and not sub_category.strip():
                sub_category = None
        else:
            sub_category = current.sub_category

        if "tags" in changes:
            tags = _clean_tags(changes["tags"] or [])
        else:
            tags = current.tags

        if "reference_links" in changes:
            links_json = _links_json(data.reference_links or [])
        else:
            links_json = json.dumps(
                [link.model_dump() for link in current.reference_links], ensure_ascii=False
            ) if current.reference_links else None

        url = current.url
        if changes.get("url") is not None:
            url = changes["url"].strip() or PENDING_MANUAL_URL

        title = current.title
        if changes.get("title"):
            title = changes["title"]

        is_published = current.is_published
        if changes.get("is_published") is not None:
            is_published = changes["is_published"]

        order_index = current.order_index
        if changes.get("order_index") is not None:
            order_index = changes["order_index"]

        step = infer_step(main_category, sub_category)

        row = await conn.fetchrow(
            f"""
            UPDATE manuals
            SET title = $2, url = $3, main_category = $4, sub_category = $5,
                tags = $6, reference_links = $7::jsonb, is_published = $8,
                order_index = $9, step_number = $10, step_name = $11,
                updated_at = NOW()
            WHERE id = $1
            RETURNING {MANUAL_COLUMNS}
            """,
            manual_id,
            title,
            url,
            main_category,
            sub_category,
            tags or None,
            links_json,
            is_published,
            order_index,
            step.step_number,
            step.step_name,
        )
    return _row_to_manual(row) if row else None


async def delete_manual(manual_id: UUID) -> bool:
    async with get_connection() as conn:
        result = await conn.execute("DELETE FROM manuals WHERE id = $1", manual_id)
    deleted = result == "DELETE 1"
    if deleted:
        logger.info("[Manuals] Deleted manual %s", manual_id)
    return deleted


# -----------------------------------------------------------------------------
# Admin list filtering
# -----------------------------------------------------------------------------

def _matches_query(manual: Manual, query: str) -> bool:
    if query in manual.title.lower():
        return True
    if query in (manual.main_category or "").lower():
        return True
    if query in (manual.sub_category or "").lower():
        return True
    return any(query in tag.lower() for tag in manual.tags)


def _timestamp_key(manual: Manual, field_name: str) -> float:
    value = getattr(manual, field_name)
    return value.timestamp() if value else float("-inf")


def apply_admin_filters(
    manuals: Sequence[Manual],
    query: Optional[str] = None,
    main_category: Optional[str] = None,
    sub_category: Optional[str] = None,
    tag: Optional[str] = None,
    status: Optional[ManualStatusFilter] = None,
    sort: ManualSort = ManualSort.ORDER_INDEX,
) -> list[Manual]:
    """Filter and sort the admin manual list."""
    filtered = list(manuals)

    if query:
        needle = query.lower()
        filtered = [manual for manual in filtered if _matches_query(manual, needle)]
    if main_category:
        filtered = [manual for manual in filtered if manual.main_category == main_category]
    if sub_category:
        filtered = [manual for manual in filtered if manual.sub_category == sub_category]
    if tag:
        filtered = [manual for manual in filtered if tag in manual.tags]
    if status is not None:
        want_published = status == ManualStatusFilter.PUBLISHED
        filtered = [manual for manual in filtered if manual.is_published == want_published]

    if sort == ManualSort.ORDER_INDEX:
        filtered.sort(key=lambda manual: manual.order_index or 0)
    elif sort == ManualSort.CREATED_AT:
        filtered.sort(key=lambda manual: _timestamp_key(manual, "created_at"), reverse=True)
    elif sort == ManualSort.UPDATED_AT:
        filtered.sort(key=lambda manual: _timestamp_key(manual, "updated_at"), reverse=True)
    elif sort == ManualSort.TITLE:
        filtered.sort(key=lambda manual: manual.title)

    return filtered
