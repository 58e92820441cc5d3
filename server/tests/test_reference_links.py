from manual_portal.models.manual import ReferenceLinkInput
from manual_portal.services.reference_links import (
    build_reference_link,
    extract_freee_article_title,
    merge_reference_links,
)


def test_extract_title_from_freee_article_url():
    url = "https://support.freee.co.jp/hc/ja/articles/202847230-%E8%B3%9E%E4%B8%8E%E3%81%AE%E8%A8%88%E7%AE%97"
    assert extract_freee_article_title(url) == "賞与の計算"


def test_extract_title_stops_at_query_and_fragment():
    assert extract_freee_article_title("https://support.freee.co.jp/hc/ja/articles/1-abc?x=1") == "abc"
    assert extract_freee_article_title("https://support.freee.co.jp/hc/ja/articles/1-abc#section") == "abc"


def test_extract_title_without_slug_returns_none():
    assert extract_freee_article_title("https://support.freee.co.jp/hc/ja/articles/123") is None


def test_extract_title_keeps_raw_slug_when_not_decodable():
    assert extract_freee_article_title("https://support.freee.co.jp/hc/ja/articles/1-%E8%B3") == "%E8%B3"


def test_explicit_title_wins():
    link = build_reference_link(" https://support.freee.co.jp/hc/ja/articles/1-abc ", " 手順 ")
    assert link.title == "手順"
    assert link.url == "https://support.freee.co.jp/hc/ja/articles/1-abc"


def test_freee_url_without_slug_gets_default_title():
    link = build_reference_link("https://support.freee.co.jp/hc/ja")
    assert link.title == "freee人事労務マニュアル"


def test_other_url_gets_generic_title():
    assert build_reference_link("https://example.com/guide").title == "参考リンク"


def test_merge_skips_blank_and_duplicate_urls():
    links = merge_reference_links([
        ReferenceLinkInput(url="https://example.com/a"),
        ReferenceLinkInput(url="  "),
        ReferenceLinkInput(url="https://example.com/a ", title="dup"),
        ReferenceLinkInput(url="https://example.com/b", title="B"),
    ])

    assert [(link.url, link.title) for link in links] == [
        ("https://example.com/a", "参考リンク"),
        ("https://example.com/b", "B"),
    ]
