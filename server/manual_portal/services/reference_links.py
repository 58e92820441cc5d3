import re
from typing import Iterable, Optional
from urllib.parse import unquote

from ..models.manual import ReferenceLink, ReferenceLinkInput

FREEE_SUPPORT_HOST = "support.freee.co.jp"
DEFAULT_FREEE_TITLE = "freee人事労務マニュアル"
DEFAULT_LINK_TITLE = "参考リンク"

_ARTICLE_SLUG = re.compile(r"articles/\d+-(.+?)(?:\?|#|$)")


def extract_freee_article_title(url: str) -> Optional[str]:
    """Pull the human-readable title out of a freee support article URL."""
    match = _ARTICLE_SLUG.search(url)
    if not match or not match.group(1):
        return None
    slug = match.group(1)
    try:
        return unquote(slug, errors="strict")
    except UnicodeDecodeError:
        return slug


def build_reference_link(url: str, title: Optional[str] = None) -> ReferenceLink:
    url = url.strip()
    if title and title.strip():
        return ReferenceLink(title=title.strip(), url=url)
    if FREEE_SUPPORT_HOST in url:
        return ReferenceLink(title=extract_freee_article_title(url) or DEFAULT_FREEE_TITLE, url=url)
    return ReferenceLink(title=DEFAULT_LINK_TITLE, url=url)


def merge_reference_links(links: Iterable[ReferenceLinkInput]) -> list[ReferenceLink]:
    """Build links in order, skipping blank and already-seen URLs."""
    merged: list[ReferenceLink] = []
    seen: set[str] = set()
    for link in links:
        url = link.url.strip()
        if not url or url in seen:
            continue
        seen.add(url)
        merged.append(build_reference_link(url, link.title))
    return merged
