"""Persistent bookmark (cursor) storage.

Bookmarks map a consumer name to the short id of the newest commit that
consumer has seen. They live in a single JSON file inside ``.git`` so they
never show up in the working tree.

No locking is done. Two processes saving at the same time race and the
last writer wins, so only one deploy process should drain a given
bookmark at a time.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from doop_git.core.config import Settings
from doop_git.core.errors import BookmarkWriteError

logger = logging.getLogger(__name__)

CursorMap = Dict[str, str]


class BookmarkStore:
    """Reads and writes the bookmark file for one checkout."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.path = settings.bookmarks_path

    def load(self) -> CursorMap:
        """Load all bookmarks, returning an empty mapping when none are stored."""
        if not self.path.exists():
            logger.debug("No bookmark file at %s", self.path)
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable bookmark file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring bookmark file %s: not a JSON object", self.path)
            return {}

        return {
            str(name): short_id
            for name, short_id in data.items()
            if isinstance(short_id, str)
        }

    def save(self, bookmarks: CursorMap) -> None:
        """Write all bookmarks, replacing the file only once fully written."""
        path: Path = self.path
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(bookmarks, f, indent="\t")
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            raise BookmarkWriteError(f"Failed to write bookmarks to {path}: {e}") from e
        finally:
            # Left behind only when the write did not complete
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.debug("Saved %d bookmark(s) to %s", len(bookmarks), path)

    def get(self, name: str) -> Optional[str]:
        """Get the stored short id for a bookmark."""
        return self.load().get(name)

    def forget(self, name: str) -> bool:
        """Remove a bookmark. Returns False if it was not stored."""
        bookmarks = self.load()
        if name not in bookmarks:
            return False
        del bookmarks[name]
        self.save(bookmarks)
        return True
