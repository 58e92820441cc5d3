from uuid import uuid4

from manual_portal.catalog.categories import CATEGORIES, get_category_by_slug
from manual_portal.models.manual import Manual
from manual_portal.services.category_view import (
    build_category_page,
    list_category_summaries,
    summarize_category,
    to_manual_card,
)

ONBOARDING = get_category_by_slug("onboarding-registration")


def _manual(sub_category=None, tags=None, url="https://support.freee.co.jp/hc/ja/articles/1", order_index=0):
    return Manual(
        id=uuid4(),
        title=f"manual-{order_index}",
        main_category=ONBOARDING.name,
        sub_category=sub_category,
        tags=tags or [],
        url=url,
        order_index=order_index,
    )


def test_summary_previews_first_three_subcategories():
    summary = summarize_category(ONBOARDING, manual_count=7)

    assert summary.subcategory_preview == ["本人に情報を登録してもらう場合", "給与情報の設定", "通勤手当の設定"]
    assert summary.more_subcategory_count == 3
    assert summary.has_steps is True
    assert summary.manual_count == 7


def test_summary_for_category_without_subcategories():
    summary = summarize_category(get_category_by_slug("flex"))

    assert summary.subcategory_preview == []
    assert summary.more_subcategory_count == 0
    assert summary.has_steps is False


def test_list_category_summaries_uses_counts_by_name():
    summaries = list_category_summaries({"賞与": 4, "unknown": 9})

    assert [summary.key for summary in summaries] == list(CATEGORIES.keys())
    counts = {summary.name: summary.manual_count for summary in summaries}
    assert counts["賞与"] == 4
    assert counts["退職"] == 0


def test_manual_card_marks_pending_manuals():
    card = to_manual_card(_manual(url="#", tags=["管理者向け", "スタンダード", "その他タグ"]))

    assert card.is_pending is True
    assert card.audience_tags == ["管理者向け"]
    assert card.plan_tags == ["スタンダード"]
    assert card.tags == ["管理者向け", "スタンダード", "その他タグ"]


def test_category_page_in_step_mode():
    manuals = [
        _manual("給与情報の設定", ["管理者向け"], order_index=1),
        _manual("税金関係", ["従業員向け"], order_index=2),
        _manual(None, ["管理者向け"], order_index=3),
    ]

    page = build_category_page(ONBOARDING, manuals)

    assert page.step_mode is True
    assert page.navigation_title == "設定の流れ"
    assert [group.key for group in page.groups] == ["STEP2 給与情報の設定", "STEP4 税金関係", "その他"]
    assert page.total_count == 3
    assert page.filtered_count == 3
    assert page.active_filter_count == 0


def test_category_page_with_filters_prunes_groups_and_reports_counts():
    manuals = [
        _manual("給与情報の設定", ["管理者向け", "ミニマム"], order_index=1),
        _manual("税金関係", ["従業員向け", "ミニマム"], order_index=2),
        _manual("保険関係", ["管理者向け"], order_index=3),
    ]

    page = build_category_page(ONBOARDING, manuals, audience_filter="管理者向け", plan_filter="ミニマム")

    assert [group.key for group in page.groups] == ["STEP2 給与情報の設定"]
    assert page.groups[0].count == 1
    assert page.total_count == 3
    assert page.filtered_count == 1
    assert page.active_filter_count == 2


def test_facet_options_toggle_the_active_value():
    page = build_category_page(ONBOARDING, [], audience_filter="管理者向け")

    options = {option.value: option for option in page.audience_options}
    assert options["管理者向け"].active is True
    assert options["管理者向け"].next_value is None
    assert options["従業員向け"].active is False
    assert options["従業員向け"].next_value == "従業員向け"
    assert [option.value for option in page.plan_options] == [
        "ミニマム",
        "スターター",
        "スタンダード",
        "プロフェッショナル",
        "アドバンス",
    ]


def test_category_page_in_subcategory_mode():
    leave = get_category_by_slug("leave")
    manual = Manual(id=uuid4(), title="有給", main_category=leave.name, sub_category="特別休暇")

    page = build_category_page(leave, [manual])

    assert page.step_mode is False
    assert page.navigation_title == "カテゴリ内の項目"
    assert page.groups[0].key == "特別休暇"
    assert page.groups[0].is_step is False
    assert page.groups[0].anchor_id == "group-特別休暇"


def test_step_like_subcategory_renders_as_plain_section():
    leave = get_category_by_slug("leave")
    manual = Manual(id=uuid4(), title="申請手順", main_category=leave.name, sub_category="STEP1 申請")

    page = build_category_page(leave, [manual])

    assert page.groups[0].key == "STEP1 申請"
    assert page.groups[0].is_step is False
