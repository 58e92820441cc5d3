"""Manual request intake and admin handling."""

import logging
from typing import Optional
from uuid import UUID

from ..database import get_connection
from ..models.manual_request import (
    ManualRequest,
    ManualRequestCreate,
    ManualRequestUpdate,
    RequestStatus,
    URGENCY_LABELS,
)

logger = logging.getLogger(__name__)

REQUEST_COLUMNS = """
    id, requester_name, requester_email, department, manual_title,
    manual_description, urgency, use_case, expected_users, additional_notes,
    status, admin_notes, created_at, updated_at, completed_at, manual_id
"""

NOT_PROVIDED = "未記入"


class UnknownManualError(ValueError):
    """Raised when a request is linked to a manual that does not exist."""


async def create_request(data: ManualRequestCreate) -> ManualRequest:
    async with get_connection() as conn:
        row = await conn.fetchrow(
            f"""
            INSERT INTO manual_requests (
                requester_name, requester_email, department, manual_title,
                manual_description, urgency, use_case, expected_users, additional_notes
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            RETURNING {REQUEST_COLUMNS}
            """,
            data.requester_name.strip(),
            str(data.requester_email),
            data.department,
            data.manual_title.strip(),
            data.manual_description.strip(),
            data.urgency.value,
            data.use_case,
            data.expected_users,
            data.additional_notes,
        )
    request = ManualRequest(**dict(row))
    logger.info("[Requests] Received manual request %s (%s)", request.id, request.urgency.value)
    return request


async def list_requests(status: Optional[RequestStatus] = None) -> list[ManualRequest]:
    """Requests newest first, optionally restricted to one status."""
    async with get_connection() as conn:
        if status is None:
            rows = await conn.fetch(
                f"SELECT {REQUEST_COLUMNS} FROM manual_requests ORDER BY created_at DESC"
            )
        else:
            rows = await conn.fetch(
                f"""
                SELECT {REQUEST_COLUMNS}
                FROM manual_requests
                WHERE status = $1
                ORDER BY created_at DESC
                """,
                status.value,
            )
    return [ManualRequest(**dict(row)) for row in rows]


async def get_request(request_id: UUID) -> Optional[ManualRequest]:
    async with get_connection() as conn:
        row = await conn.fetchrow(
            f"SELECT {REQUEST_COLUMNS} FROM manual_requests WHERE id = $1",
            request_id,
        )
    return ManualRequest(**dict(row)) if row else None


async def update_request(request_id: UUID, data: ManualRequestUpdate) -> Optional[ManualRequest]:
    """Update status, admin notes and linked manual.

    Moving a request to completed stamps completed_at.
    """
    changes = data.model_dump(exclude_unset=True)

    async with get_connection() as conn:
        current = await conn.fetchrow(
            f"SELECT {REQUEST_COLUMNS} FROM manual_requests WHERE id = $1",
            request_id,
        )
        if not current:
            return None

        status = changes.get("status") or RequestStatus(current["status"])
        admin_notes = changes["admin_notes"] if "admin_notes" in changes else current["admin_notes"]
        manual_id = changes["manual_id"] if "manual_id" in changes else current["manual_id"]
        if changes.get("manual_id") is not None:
            exists = await conn.fetchval("SELECT 1 FROM manuals WHERE id = $1", manual_id)
            if not exists:
                raise UnknownManualError(f"Manual not found: {manual_id}")

        row = await conn.fetchrow(
            f"""
            UPDATE manual_requests
            SET status = $2,
                admin_notes = $3,
                manual_id = $4,
                completed_at = CASE WHEN $2 = 'completed' THEN NOW() ELSE completed_at END,
                updated_at = NOW()
            WHERE id = $1
            RETURNING {REQUEST_COLUMNS}
            """,
            request_id,
            status.value,
            admin_notes,
            manual_id,
        )
    logger.info("[Requests] Request %s set to %s", request_id, status.value)
    return ManualRequest(**dict(row)) if row else None


async def count_requests_by_status() -> dict[str, int]:
    async with get_connection() as conn:
        rows = await conn.fetch(
            "SELECT status, COUNT(*) AS request_count FROM manual_requests GROUP BY status"
        )
    counts = {status.value: 0 for status in RequestStatus}
    for row in rows:
        counts[row["status"]] = row["request_count"]
    return counts


def build_notification_body(request: ManualRequest) -> str:
    """Plain-text admin notification for a new manual request."""
    return "\n".join([
        "新しいマニュアルリクエストが届きました。",
        "",
        "【リクエスト情報】",
        f"リクエスト者: {request.requester_name}",
        f"メールアドレス: {request.requester_email}",
        f"部署: {request.department or NOT_PROVIDED}",
        f"緊急度: {URGENCY_LABELS[request.urgency]}",
        "",
        "【リクエスト内容】",
        f"タイトル: {request.manual_title}",
        f"説明: {request.manual_description}",
        "",
        "【詳細情報】",
        f"使用目的: {request.use_case or NOT_PROVIDED}",
        f"想定利用者: {request.expected_users or NOT_PROVIDED}",
        f"備考: {request.additional_notes or NOT_PROVIDED}",
        "",
        "管理画面でリクエストの詳細を確認し、対応を行ってください。",
    ])
