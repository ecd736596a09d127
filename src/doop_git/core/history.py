"""Reads recent commit history by shelling out to ``git log``.

Fields are separated by ``|`` and the message body comes last, so pipes in
the message are safe. Git trims whitespace around identity names, so an
author field ending in whitespace means a pipe inside the name was taken
for a separator; the pieces are joined back and a warning logged. A pipe
with no whitespace before it (``Ann|Ops``) cannot be detected and leaves
the author truncated.
"""

import logging
import os
import subprocess
from typing import List, Optional

from doop_git.core.config import Settings
from doop_git.core.errors import CommandFailed, CommandUnavailable, MalformedRecord
from doop_git.core.release import release_name
from doop_git.models.commit import CommitRecord

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
RECORD_SENTINEL = "\x00"
LOG_FORMAT = "%H|%h|%cI|%an|%B%x00"
FIELD_COUNT = 5
DEFAULT_LIMIT = 30
EMPTY_HISTORY_MARKERS = ("does not have any commits yet", "bad default revision")


def parse_record(raw: str, first_line_only: bool = True) -> CommitRecord:
    """Parse one sentinel-delimited log segment into a CommitRecord.

    The message body is the last field, so pipes inside it are kept.
    """
    fields = raw.split(FIELD_SEPARATOR, FIELD_COUNT - 1)
    if len(fields) < FIELD_COUNT or not fields[0]:
        raise MalformedRecord(raw, len(fields))

    full_id, short_id, timestamp, author, body = fields
    if author != author.rstrip() and FIELD_SEPARATOR in body:
        # Pipe inside the author name; pull the split pieces back together
        while author != author.rstrip() and FIELD_SEPARATOR in body:
            piece, body = body.split(FIELD_SEPARATOR, 1)
            author = f"{author}{FIELD_SEPARATOR}{piece}"
        logger.warning("Author name of %s contains '%s': %r", short_id, FIELD_SEPARATOR, author)

    body = body.rstrip()
    if first_line_only:
        lines = body.splitlines()
        subject = lines[0] if lines else ""
    else:
        subject = body

    return CommitRecord(
        full_id=full_id,
        short_id=short_id,
        timestamp=timestamp,
        author=author,
        subject=subject,
        release=release_name(full_id),
    )


def parse_log(output: str, first_line_only: bool = True) -> List[CommitRecord]:
    """Parse raw ``git log`` output, skipping records that cannot be read."""
    records = []
    for segment in output.split(RECORD_SENTINEL):
        segment = segment.strip()
        if not segment:
            # Trailing piece after the last sentinel
            continue
        try:
            records.append(parse_record(segment, first_line_only))
        except MalformedRecord as e:
            logger.warning("Skipping malformed log record: %s", e)
    return records


class LogFetcher:
    """Fetches commit records for the repository at ``settings.root``."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _build_command(self, limit: int) -> List[str]:
        return [
            self.settings.git_binary,
            "-C",
            str(self.settings.root),
            "log",
            f"--pretty=format:{LOG_FORMAT}",
            f"--max-count={limit}",
        ]

    def _run(self, cmd: List[str]) -> str:
        logger.debug("Running %s", " ".join(cmd))

        # Untranslated messages so EMPTY_HISTORY_MARKERS can be matched
        env = os.environ.copy()
        env["LC_ALL"] = "C"

        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=env,
                timeout=self.settings.timeout,
                check=False,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise CommandUnavailable(self.settings.git_binary, str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise CommandUnavailable(
                self.settings.git_binary,
                f"timed out after {self.settings.timeout}s",
            ) from e

        if result.returncode != 0:
            raise CommandFailed(cmd, result.returncode, result.stdout, result.stderr)
        return result.stdout

    def fetch(
        self, limit: int = DEFAULT_LIMIT, first_line_only: bool = True
    ) -> List[CommitRecord]:
        """Return up to ``limit`` records, newest first."""
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")

        try:
            output = self._run(self._build_command(limit))
        except CommandFailed as e:
            if any(marker in e.stderr for marker in EMPTY_HISTORY_MARKERS):
                logger.info("Repository at %s has no commits yet", self.settings.root)
                return []
            raise

        records = parse_log(output, first_line_only)
        logger.debug("Fetched %d commit records", len(records))
        return records[:limit]

    def history(
        self, limit: int = DEFAULT_LIMIT, first_line_only: bool = True
    ) -> List[CommitRecord]:
        """Return the bounded, newest-first history."""
        return self.fetch(limit=limit, first_line_only=first_line_only)

    def current(self, first_line_only: bool = True) -> Optional[CommitRecord]:
        """Return the most recent commit, or None for an empty history."""
        records = self.fetch(limit=1, first_line_only=first_line_only)
        return records[0] if records else None
