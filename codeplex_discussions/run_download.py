from __future__ import annotations

import logging
from typing import Optional

import click

from codeplex_discussions.archive_writer import ForumArchiveWriter
from codeplex_discussions.discussion_crawler import DiscussionCrawler
from codeplex_discussions.errors import ConfigurationError, ListingPageError
from codeplex_discussions.http_client import HttpClient, HttpConfig
from codeplex_discussions.run_logging import configure_run_logging
from codeplex_discussions.settings import (
    DEFAULT_LOG_FILE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PAGE_SIZE,
    DownloadConfig,
    DownloaderSettings,
    load_settings,
    resolve_config,
)

logger = logging.getLogger(__name__)


def download_forums(config: DownloadConfig, http: HttpClient) -> dict[str, int]:
    """
    Download every configured forum in order. Returns thread counts per forum.

    Raises:
        ListingPageError: a listing page stayed unavailable; the run stops there
    """
    counts: dict[str, int] = {}
    for forum in config.forums:
        writer = ForumArchiveWriter(config.output_dir, forum)
        crawler = DiscussionCrawler(forum=forum, page_size=config.page_size, http=http, writer=writer)
        threads = crawler.download_forum()
        counts[forum] = len(threads)
    return counts


def build_http_client(s: DownloaderSettings) -> HttpClient:
    return HttpClient(
        HttpConfig(
            max_retries=s.http_max_retries,
            retry_delay_sec=s.http_retry_delay_sec,
            timeout_sec=s.http_timeout_sec,
            user_agent=s.http_user_agent,
        )
    )


@click.command(context_settings={"help_option_names": ["-?", "-h", "--help"]})
@click.option("-f", "--forums", default=None, help="Comma separated CodePlex forum names (required).")
@click.option(
    "-o",
    "--outputDirectory",
    "output_directory",
    default=None,
    help=f"Directory the downloaded files are written to. [default: {DEFAULT_OUTPUT_DIR}]",
)
@click.option(
    "-l",
    "--logfile",
    default=None,
    help=f"Log file name inside the output directory; empty disables it. [default: {DEFAULT_LOG_FILE}]",
)
@click.option(
    "-p",
    "--pageSize",
    "page_size",
    type=int,
    default=None,
    help=f"Number of threads per listing page. [default: {DEFAULT_PAGE_SIZE}]",
)
def main(
    forums: Optional[str],
    output_directory: Optional[str],
    logfile: Optional[str],
    page_size: Optional[int],
) -> None:
    """Download CodePlex discussion threads and posts to disk."""
    s = load_settings()
    try:
        config = resolve_config(
            s,
            forums=forums,
            output_dir=output_directory,
            log_file=logfile,
            page_size=page_size,
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    http = build_http_client(s)
    with configure_run_logging(config.output_dir, config.log_file):
        logger.info("Downloading forums=%s into %s", ",".join(config.forums), config.output_dir)
        try:
            counts = download_forums(config, http)
        except ListingPageError as e:
            raise click.ClickException(str(e)) from e
        finally:
            http.close()
        logger.info("Downloaded threads per forum: %s", counts)


if __name__ == "__main__":
    main()
