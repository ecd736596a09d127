"""Incremental history retrieval against named bookmarks."""

import logging
from typing import List, Optional

from doop_git.core.bookmarks import BookmarkStore
from doop_git.core.config import Settings
from doop_git.core.errors import CursorNotFound, MissingCursorName
from doop_git.core.history import DEFAULT_LIMIT, LogFetcher
from doop_git.models.commit import CommitRecord

logger = logging.getLogger(__name__)


class HistoryTracker:
    """Answers "what is new since bookmark X" for one checkout.

    Every call to ``history_since_bookmark`` drains the bookmark: it is moved
    to the newest commit even when nothing new is reported, so a deploy
    process only ever sees each commit once.
    """

    def __init__(
        self,
        settings: Settings,
        fetcher: Optional[LogFetcher] = None,
        store: Optional[BookmarkStore] = None,
    ):
        self.settings = settings
        self.fetcher = fetcher or LogFetcher(settings)
        self.store = store or BookmarkStore(settings)

    def current(self) -> Optional[CommitRecord]:
        """Get the latest commit."""
        return self.fetcher.current()

    def history(
        self, limit: int = DEFAULT_LIMIT, first_line_only: bool = True
    ) -> List[CommitRecord]:
        """Get recent history, newest first."""
        return self.fetcher.history(limit=limit, first_line_only=first_line_only)

    def history_since_bookmark(
        self, name: Optional[str], strict: bool = False
    ) -> List[CommitRecord]:
        """Return commits made since ``name`` was last drained, oldest first.

        The first call for a bookmark returns nothing, there being no point of
        reference yet. When the stored commit has fallen out of the fetched
        window (or history was rewritten) nothing is returned either, unless
        ``strict`` is set, in which case CursorNotFound is raised once the
        bookmark has been moved forward.
        """
        if not name:
            raise MissingCursorName(name)

        bookmarks = self.store.load()
        history = self.fetcher.fetch(limit=self.settings.window)

        if not history:
            logger.info("No commits yet, bookmark '%s' left untouched", name)
            return []

        stored = bookmarks.get(name)
        missing = False
        if not stored:
            logger.info("Bookmark '%s' not found, starting from %s", name, history[0].short_id)
            new_records: List[CommitRecord] = []
        else:
            # %h grows with the repository and follows core.abbrev
            match = next(
                (i for i, record in enumerate(history) if record.full_id.startswith(stored)),
                None,
            )
            if match is not None:
                new_records = list(reversed(history[:match]))
            else:
                missing = True
                new_records = []
                logger.warning(
                    "Bookmark '%s' (%s) is not within the last %d commits",
                    name,
                    stored,
                    self.settings.window,
                )

        bookmarks[name] = history[0].short_id
        self.store.save(bookmarks)

        if missing and strict:
            raise CursorNotFound(name, stored, self.settings.window)
        return new_records
