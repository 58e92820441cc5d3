import pytest

from manual_portal.catalog.categories import (
    CATEGORIES,
    get_all_category_pairs,
    get_category,
    get_category_by_name,
    get_category_by_slug,
    get_main_categories,
    get_sub_categories,
)


def test_taxonomy_has_fifteen_categories_in_declared_order():
    keys = get_main_categories()
    assert len(keys) == 15
    assert keys[0] == "onboarding_registration"
    assert keys[-1] == "employee_attendance"


def test_get_category_by_slug_exact_match():
    category = get_category_by_slug("onboarding-registration")
    assert category is not None
    assert category.name == "入社（入社日までに登録）"


def test_get_category_by_slug_miss_returns_none():
    assert get_category_by_slug("does-not-exist") is None
    assert get_category_by_slug("Bonus") is None


def test_get_category_by_name_is_exact():
    assert get_category_by_name("賞与").slug == "bonus"
    assert get_category_by_name(" 賞与") is None
    assert get_category_by_name("unknown") is None


def test_get_sub_categories_returns_copy():
    subs = get_sub_categories("leave")
    assert subs == ["正社員の有給休暇", "パートの有給休暇", "特別休暇"]

    subs.append("mutated")
    subs.clear()
    assert get_sub_categories("leave") == ["正社員の有給休暇", "パートの有給休暇", "特別休暇"]
    assert CATEGORIES["leave"].subcategories == ("正社員の有給休暇", "パートの有給休暇", "特別休暇")


def test_get_sub_categories_unknown_key_is_empty():
    assert get_sub_categories("nope") == []
    assert get_sub_categories("flex") == []


def test_taxonomy_mapping_is_read_only():
    with pytest.raises(TypeError):
        CATEGORIES["new"] = CATEGORIES["bonus"]


def test_get_category_by_key():
    assert get_category("bonus").label == "賞与"
    assert get_category("missing") is None


def test_slugs_and_names_are_unique():
    slugs = [category.slug for category in CATEGORIES.values()]
    names = [category.name for category in CATEGORIES.values()]
    assert len(set(slugs)) == len(slugs)
    assert len(set(names)) == len(names)


def test_all_category_pairs_follow_taxonomy_order():
    pairs = get_all_category_pairs()
    expected_count = sum(len(category.subcategories) for category in CATEGORIES.values())
    assert len(pairs) == expected_count
    assert pairs[0] == {
        "main_category": "入社（入社日までに登録）",
        "sub_category": "本人に情報を登録してもらう場合",
    }
    assert not any(pair["main_category"] == "フレックス" for pair in pairs)
