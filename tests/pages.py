"""Canned CodePlex pages and a fake requests session for offline tests."""

from __future__ import annotations

from typing import Optional

import requests


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code
        self.encoding: Optional[str] = None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status={self.status_code}", response=self)


class FakeSession:
    """
    Stand-in for requests.Session. Routes map a URL to an outcome (body text,
    FakeResponse or exception) or to a list of outcomes consumed in order,
    the last one repeating. Unknown URLs raise ConnectionError.
    """

    def __init__(self, routes: dict):
        self.routes = routes
        self.headers: dict[str, str] = {}
        self.calls: list[str] = []
        self.closed = False

    def get(self, url: str, timeout: Optional[float] = None):
        self.calls.append(url)
        outcome = self.routes.get(url, requests.ConnectionError(f"no route for {url}"))
        if isinstance(outcome, list):
            outcome = outcome.pop(0) if len(outcome) > 1 else outcome[0]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, (FakeResponse, requests.Response)):
            return outcome
        return FakeResponse(outcome)

    def close(self) -> None:
        self.closed = True


def listing_url(forum: str, page: int, size: int = 100) -> str:
    return f"http://{forum}.codeplex.com/discussions?searchText=&size={size}&page={page}"


def thread_block(href: Optional[str], title: str = "Some thread", author: Optional[str] = "alice",
                 date: Optional[str] = "1/2/2015", time: Optional[str] = "10:00 AM") -> str:
    date_html = f'<span class="smartDate dateOnly">{date}</span>' if date else ""
    time_html = f'<span class="smartDate timeOnly">{time}</span>' if time else ""
    anchor_html = f'<h3><a href="{href}">{title}</a></h3>' if href else ""
    author_html = f'<p>by <span class="author">{author}</span></p>' if author else ""
    return (
        '<div class="post">'
        f'<div class="post_info"><p>{date_html}{time_html}</p></div>'
        f'<div class="post_content">{anchor_html}{author_html}</div>'
        "</div>"
    )


def listing_html(blocks: list[str], last: bool) -> str:
    next_item = '<li class="last">Next</li>' if last else '<li class="last"><a href="?page=next">Next</a></li>'
    return (
        "<html><body>"
        f'<div id="threads">{"".join(blocks)}</div>'
        f'<ul class="pagination"><li class="first"><a href="?page=0">First</a></li>{next_item}</ul>'
        "</body></html>"
    )


def post_row(post_id: Optional[str], username: str = "bob", title: str = "1/2/2015 10:00:00 AM",
             body: str = "<p>Hello</p>") -> str:
    anchor_html = f'<a name="{post_id}"></a>' if post_id is not None else ""
    return (
        '<tr id="PostPanel">'
        f"<td><div>{anchor_html}<div>"
        f'<a class="UserProfileLink" href="/site/users/view/{username}">{username}</a>'
        f'<span class="smartDate" title="{title}">Jan 2</span>'
        "</div></div></td>"
        f"<td>{body}</td>"
        "</tr>"
    )


def detail_html(rows: list[str]) -> str:
    return f'<html><body><table id="ThreadPosts">{"".join(rows)}</table></body></html>'

