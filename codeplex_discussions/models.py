from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ThreadSummary:
    """Thread metadata parsed from a listing page, before its posts are known."""

    thread_id: Optional[str]
    title: Optional[str]
    url: Optional[str]
    author_username: Optional[str] = None
    discussion_date: Optional[str] = None
    time: Optional[str] = None


@dataclass(frozen=True)
class Post:
    """One row of a thread detail page."""

    post_id: str
    discussion_thread_id: Optional[str]
    username: Optional[str]
    date_time: Optional[str]
    content: Optional[str]

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "Id": self.post_id,
            "DiscussionThreadId": self.discussion_thread_id,
            "Username": self.username,
            "DateTime": self.date_time,
            "Content": self.content,
        }


@dataclass(frozen=True)
class DiscussionThread:
    """Full thread: listing metadata plus the posts of its detail page."""

    thread_id: Optional[str]
    title: Optional[str]
    author_username: Optional[str]
    discussion_date: Optional[str]
    time: Optional[str]
    posts: tuple[Post, ...] = ()

    @classmethod
    def from_summary(cls, summary: ThreadSummary, posts: list[Post]) -> DiscussionThread:
        return cls(
            thread_id=summary.thread_id,
            title=summary.title,
            author_username=summary.author_username,
            discussion_date=summary.discussion_date,
            time=summary.time,
            posts=tuple(posts),
        )

    def to_json_dict(self) -> dict[str, Any]:
        # PascalCase keys keep the layout of existing <forum>.json archives.
        return {
            "Id": self.thread_id,
            "Title": self.title,
            "AuthorUsername": self.author_username,
            "DiscussionDate": self.discussion_date,
            "Time": self.time,
            "Posts": [p.to_json_dict() for p in self.posts],
        }
