from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from codeplex_discussions.models import DiscussionThread

logger = logging.getLogger(__name__)


class ForumArchiveWriter:
    """
    Writes one forum's output under <output_dir>/<forum>/:

    - index_<page>.html      raw listing page
    - <thread_id>/index.html raw thread detail page
    - <forum>.json           every thread with its posts, written once at the end
    """

    def __init__(self, output_dir: str | Path, forum: str):
        self.forum = forum
        self.forum_dir = Path(output_dir) / forum
        self.forum_dir.mkdir(parents=True, exist_ok=True)

    def write_listing_page(self, page: int, html: str) -> Path:
        path = self.forum_dir / f"index_{page}.html"
        path.write_text(html, encoding="utf-8")
        return path

    def write_thread_page(self, thread_id: str, html: str) -> Path:
        thread_dir = self.forum_dir / thread_id
        thread_dir.mkdir(parents=True, exist_ok=True)
        path = thread_dir / "index.html"
        path.write_text(html, encoding="utf-8")
        return path

    def write_forum_json(self, threads: Iterable[DiscussionThread]) -> Path:
        path = self.forum_dir / f"{self.forum}.json"
        payload = [t.to_json_dict() for t in threads]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False)
        logger.info("Wrote %s threads to %s", len(payload), path)
        return path
