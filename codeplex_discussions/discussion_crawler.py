from __future__ import annotations

import logging
from urllib.parse import urlencode

from codeplex_discussions.archive_writer import ForumArchiveWriter
from codeplex_discussions.discussion_parser import parse_listing_page, parse_posts
from codeplex_discussions.errors import ListingPageError
from codeplex_discussions.http_client import HttpClient
from codeplex_discussions.models import DiscussionThread, Post, ThreadSummary

logger = logging.getLogger(__name__)


class DiscussionCrawler:
    """
    Crawler for one CodePlex forum's discussions.

    Scope:
    - Listing page: http://<forum>.codeplex.com/discussions?searchText=&size=<n>&page=<p>
    - Thread detail page: whatever URL the listing page links to

    Pages are walked sequentially from page 0 until the last-page marker
    shows up. Every fetched page is archived as it arrives; the aggregate
    JSON is written only once the whole forum has been walked.
    """

    START_PAGE = 0

    def __init__(self, forum: str, page_size: int, http: HttpClient, writer: ForumArchiveWriter):
        self.forum = forum
        self.page_size = int(page_size)
        self.http = http
        self.writer = writer

    def build_list_url(self, page: int) -> str:
        query = urlencode({"searchText": "", "size": self.page_size, "page": page})
        return f"http://{self.forum}.codeplex.com/discussions?{query}"

    def fetch_listing_page(self, page: int) -> str:
        """
        Fetch and archive one listing page.

        Raises:
            ListingPageError: when the page is unavailable after retries
        """
        return self._fetch_listing(page, self.build_list_url(page))

    def fetch_thread(self, summary: ThreadSummary) -> DiscussionThread:
        """Attach the posts of the detail page; an unavailable page gives no posts."""
        return DiscussionThread.from_summary(summary, self._fetch_posts(summary))

    def crawl(self) -> list[DiscussionThread]:
        threads: list[DiscussionThread] = []
        page = self.START_PAGE

        while True:
            list_url = self.build_list_url(page)
            html = self._fetch_listing(page, list_url)

            summaries, last_page = parse_listing_page(html, base_url=list_url)
            logger.info("Parsed %s threads: forum=%s page=%s", len(summaries), self.forum, page)
            for summary in summaries:
                threads.append(self.fetch_thread(summary))

            if last_page:
                break
            page += 1

        return threads

    def download_forum(self) -> list[DiscussionThread]:
        threads = self.crawl()
        self.writer.write_forum_json(threads)
        logger.info(
            "Finished forum=%s threads=%s posts=%s",
            self.forum,
            len(threads),
            sum(len(t.posts) for t in threads),
        )
        return threads

    # -------------------------
    # Helpers
    # -------------------------

    def _fetch_listing(self, page: int, list_url: str) -> str:
        logger.info("Fetching thread list: forum=%s page=%s url=%s", self.forum, page, list_url)

        html = self.http.get_text(list_url)
        if html is None:
            err = ListingPageError(list_url)
            logger.error("%s", err)
            raise err

        self.writer.write_listing_page(page, html)
        return html

    def _fetch_posts(self, summary: ThreadSummary) -> list[Post]:
        if not summary.url:
            logger.warning("Thread has no detail link: forum=%s title=%s", self.forum, summary.title)
            return []

        logger.info("Fetching thread: thread_id=%s url=%s", summary.thread_id, summary.url)
        html = self.http.get_text(summary.url)
        if html is None:
            return []

        if summary.thread_id:
            self.writer.write_thread_page(summary.thread_id, html)
        return parse_posts(html, summary.thread_id, summary.url)
