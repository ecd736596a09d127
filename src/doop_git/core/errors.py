"""Exceptions raised by doop-git."""

from typing import List, Optional


class DoopGitError(Exception):
    """Base class for every doop-git failure."""


class CommandUnavailable(DoopGitError):
    """The git binary could not be located or executed."""

    def __init__(self, binary: str, reason: str):
        self.binary = binary
        self.reason = reason
        super().__init__(f"Git command not available ({binary}): {reason}")


class CommandFailed(DoopGitError):
    """The git command exited with a non-zero status."""

    def __init__(
        self, cmd: List[str], returncode: int, stdout: str = "", stderr: str = ""
    ):
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = stderr.strip() or stdout.strip() or "no output"
        super().__init__(
            f"Git command failed with exit code {returncode}: {detail}"
        )


class MalformedRecord(DoopGitError):
    """A single log record could not be parsed."""

    def __init__(self, raw: str, field_count: int):
        self.raw = raw
        self.field_count = field_count
        super().__init__(
            f"Expected 5 fields in log record, got {field_count}: {raw[:80]!r}"
        )


class MissingCursorName(DoopGitError, ValueError):
    """A bookmark operation was called without a bookmark name."""

    def __init__(self, name: Optional[str] = None):
        self.name = name
        super().__init__("history_since_bookmark() must have a specified bookmark")


class CursorNotFound(DoopGitError):
    """The stored bookmark is not part of the fetched history window."""

    def __init__(self, name: str, short_id: str, window: int):
        self.name = name
        self.short_id = short_id
        self.window = window
        super().__init__(
            f"Bookmark '{name}' points at {short_id}, which is not within the "
            f"last {window} commits; a full resync is needed"
        )


class BookmarkWriteError(DoopGitError):
    """The bookmark file could not be written."""
