import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from manual_portal.models.manual import Manual
from manual_portal.models.manual_request import ManualRequest
from manual_portal.routes import categories as categories_routes
from manual_portal.routes import manuals as manuals_routes
from manual_portal.routes import requests as requests_routes
from manual_portal.services import manual_service, request_service

ONBOARDING = "入社（入社日までに登録）"


def _manual(sub_category=None, tags=None, url="#", order_index=0, main_category=ONBOARDING) -> Manual:
    return Manual(
        id=uuid4(),
        title=f"manual-{order_index}",
        url=url,
        main_category=main_category,
        sub_category=sub_category,
        tags=tags or [],
        order_index=order_index,
    )


def test_category_page_unknown_slug_is_404():
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(categories_routes.get_category_page("no-such-category"))
    assert exc_info.value.status_code == 404


def test_category_page_rejects_unknown_facet_values():
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(categories_routes.get_category_page("bonus", audience="社長向け"))
    assert exc_info.value.status_code == 400

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(categories_routes.get_category_page("bonus", plan="エンタープライズ"))
    assert exc_info.value.status_code == 400


def test_category_page_groups_published_manuals(monkeypatch):
    requested: list[str] = []

    async def _fake_list(main_category):
        requested.append(main_category)
        return [
            _manual("給与情報の設定", ["管理者向け"], order_index=1),
            _manual("本人に情報を登録してもらう場合", ["従業員向け"], order_index=2),
        ]

    monkeypatch.setattr(manual_service, "list_published_by_category", _fake_list)

    page = asyncio.run(categories_routes.get_category_page("onboarding-registration", audience="管理者向け"))

    assert requested == [ONBOARDING]
    assert [group.key for group in page.groups] == ["STEP2 給与情報の設定"]
    assert page.total_count == 2
    assert page.filtered_count == 1


def test_category_page_treats_empty_facet_as_unset(monkeypatch):
    async def _fake_list(main_category):
        return [_manual("税金関係")]

    monkeypatch.setattr(manual_service, "list_published_by_category", _fake_list)

    page = asyncio.run(categories_routes.get_category_page("onboarding-registration", audience="", plan=""))

    assert page.active_filter_count == 0
    assert page.filtered_count == 1


def test_list_categories_attaches_counts(monkeypatch):
    async def _fake_counts():
        return {"賞与": 2}

    monkeypatch.setattr(manual_service, "count_published_by_category", _fake_counts)

    summaries = asyncio.run(categories_routes.list_categories())

    assert len(summaries) == 15
    bonus = next(summary for summary in summaries if summary.slug == "bonus")
    assert bonus.manual_count == 2


def test_manual_detail_includes_category_link_and_pending_flag(monkeypatch):
    manual = _manual("賞与", main_category="賞与")

    async def _fake_get(manual_id):
        return manual if manual_id == manual.id else None

    monkeypatch.setattr(manual_service, "get_published_manual", _fake_get)

    detail = asyncio.run(manuals_routes.get_manual(manual.id))
    assert detail.category_slug == "bonus"
    assert detail.category_label == "賞与"
    assert detail.is_pending is True

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(manuals_routes.get_manual(uuid4()))
    assert exc_info.value.status_code == 404


def test_search_route_reports_total(monkeypatch):
    async def _fake_search(query):
        assert query == " 賞与 "
        return [_manual(main_category="賞与"), _manual(main_category="賞与")]

    monkeypatch.setattr(manual_service, "search_published", _fake_search)

    result = asyncio.run(manuals_routes.search_manuals(" 賞与 "))

    assert result.query == "賞与"
    assert result.total == 2


def test_submit_manual_request_queues_notification(monkeypatch):
    asyncio.run(_run_submit_manual_request_test(monkeypatch))


async def _run_submit_manual_request_test(monkeypatch):
    app = FastAPI()
    app.include_router(requests_routes.router, prefix="/api/requests")

    now = datetime.now(timezone.utc)
    notified: list[ManualRequest] = []

    async def _fake_create(data):
        return ManualRequest(
            id=uuid4(),
            requester_name=data.requester_name,
            requester_email=str(data.requester_email),
            manual_title=data.manual_title,
            manual_description=data.manual_description,
            urgency=data.urgency,
            status="pending",
            created_at=now,
            updated_at=now,
        )

    async def _fake_notify(request):
        notified.append(request)

    monkeypatch.setattr(request_service, "create_request", _fake_create)
    monkeypatch.setattr(requests_routes, "notify_manual_request", _fake_notify)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.post(
            "/api/requests",
            json={
                "requester_name": "山田 太郎",
                "requester_email": "taro@example.com",
                "manual_title": "賞与の計算方法",
                "manual_description": "手順を知りたい",
                "urgency": "low",
            },
        )

    assert response.status_code == 201, response.text
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "リクエストが送信されました。ありがとうございました。"
    assert len(notified) == 1
    assert str(notified[0].id) == payload["id"]


def test_submit_manual_request_validates_email(monkeypatch):
    asyncio.run(_run_submit_invalid_email_test(monkeypatch))


async def _run_submit_invalid_email_test(monkeypatch):
    app = FastAPI()
    app.include_router(requests_routes.router, prefix="/api/requests")

    async def _unexpected_create(data):
        raise AssertionError("create_request should not be called")

    monkeypatch.setattr(request_service, "create_request", _unexpected_create)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.post(
            "/api/requests",
            json={
                "requester_name": "山田 太郎",
                "requester_email": "not-an-email",
                "manual_title": "賞与",
                "manual_description": "説明",
            },
        )

    assert response.status_code == 422
