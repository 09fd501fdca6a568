from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from codeplex_discussions.models import Post, ThreadSummary

logger = logging.getLogger(__name__)

# Attribute selectors below compare the whole class/id value, not one token
# of it: "smartDate dateOnly" and "smartDate" are different cells.
THREAD_BLOCK_SELECTOR = 'div[class="post_info"]'
THREAD_ANCHOR_SELECTOR = ':scope > div[class="post_content"] > h3 > a'
THREAD_AUTHOR_SELECTOR = ':scope > div[class="post_content"] > p > span[class="author"]'
THREAD_DATE_SELECTOR = ':scope > p > span[class="smartDate dateOnly"]'
THREAD_TIME_SELECTOR = ':scope > p > span[class="smartDate timeOnly"]'

POST_ROW_SELECTOR = 'tr[id="PostPanel"]'
POST_ANCHOR_SELECTOR = ":scope > td > div > a"
POST_DATE_SELECTOR = ':scope > td > div > div > span[class="smartDate"]'
POST_AUTHOR_SELECTOR = ':scope > td > div > div > a[class="UserProfileLink"]'
POST_ANCHOR_PREFIX = "post"

LAST_PAGE_MARKER_SELECTOR = 'li[class="last"]'
LAST_PAGE_MARKER_TEXT = "Next"


def thread_id_from_url(url: str) -> str:
    """Thread id is the last '/'-delimited segment of the detail URL."""
    return url.split("/")[-1]


def parse_thread_summaries(html: str, base_url: Optional[str] = None) -> list[ThreadSummary]:
    """
    Parse a listing page into one summary per thread block.

    Every field is optional; a block with missing pieces still yields a
    summary so the count always matches the number of blocks on the page.
    """
    return _thread_summaries(BeautifulSoup(html, "lxml"), base_url)


def parse_listing_page(html: str, base_url: Optional[str] = None) -> tuple[list[ThreadSummary], bool]:
    """Thread summaries and the last-page flag from a single parse of the page."""
    soup = BeautifulSoup(html, "lxml")
    return _thread_summaries(soup, base_url), _is_last_page(soup)


def _thread_summaries(soup: BeautifulSoup, base_url: Optional[str]) -> list[ThreadSummary]:
    out: list[ThreadSummary] = []

    for block in soup.select(THREAD_BLOCK_SELECTOR):
        container = block.parent

        anchor = _select_one(container, THREAD_ANCHOR_SELECTOR)
        title = _text(anchor)
        href = anchor.get("href") if anchor is not None else None

        url: Optional[str] = None
        thread_id: Optional[str] = None
        if href:
            url = urljoin(base_url, href) if base_url else href
            thread_id = thread_id_from_url(href)

        out.append(
            ThreadSummary(
                thread_id=thread_id,
                title=title,
                url=url,
                author_username=_text(_select_one(container, THREAD_AUTHOR_SELECTOR)),
                discussion_date=_text(_select_one(block, THREAD_DATE_SELECTOR)),
                time=_text(_select_one(block, THREAD_TIME_SELECTOR)),
            )
        )

    return out


def parse_posts(html: str, thread_id: Optional[str], thread_url: str) -> list[Post]:
    """
    Parse a thread detail page into posts.

    Rows without a usable post id are logged and skipped; the remaining
    rows are still parsed.
    """
    soup = BeautifulSoup(html, "lxml")
    posts: list[Post] = []

    for row in soup.select(POST_ROW_SELECTOR):
        post_id = _post_id(row)
        if not post_id:
            logger.warning(
                "No postId found for PostPanel tr: %s and threadUrl: %s. Skipping post.",
                row.get_text(" ", strip=True),
                thread_url,
            )
            continue

        date_span = row.select_one(POST_DATE_SELECTOR)
        cells = row.find_all("td", recursive=False)

        posts.append(
            Post(
                post_id=post_id,
                discussion_thread_id=thread_id,
                username=_text(row.select_one(POST_AUTHOR_SELECTOR)),
                date_time=date_span.get("title") if date_span is not None else None,
                content=cells[1].decode_contents() if len(cells) > 1 else None,
            )
        )

    return posts


def is_last_page(html: str) -> bool:
    """
    A listing page is the last one when its final "last" pager item holds
    the bare label instead of a link.

    Pages without any pager item are treated as last so the crawl ends.
    """
    return _is_last_page(BeautifulSoup(html, "lxml"))


def _is_last_page(soup: BeautifulSoup) -> bool:
    markers = soup.select(LAST_PAGE_MARKER_SELECTOR)
    if not markers:
        logger.warning("No last-page marker found; treating page as the last one.")
        return True
    return markers[-1].decode_contents() == LAST_PAGE_MARKER_TEXT


def _post_id(row: Tag) -> Optional[str]:
    anchor = row.select_one(POST_ANCHOR_SELECTOR)
    if anchor is None:
        return None
    name = anchor.get("name")
    if not name:
        return None
    return name.removeprefix(POST_ANCHOR_PREFIX)


def _select_one(node: Optional[Tag], selector: str) -> Optional[Tag]:
    if node is None:
        return None
    return node.select_one(selector)


def _text(node: Optional[Tag]) -> Optional[str]:
    if node is None:
        return None
    return node.get_text().strip()
