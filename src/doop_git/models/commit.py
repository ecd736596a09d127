"""Commit record model for Git history fetches."""

from typing import Any, Dict

from pydantic import BaseModel


class CommitRecord(BaseModel):
    """Represents a single commit read from the application's Git log."""

    full_id: str
    short_id: str
    timestamp: str  # ISO-8601 committer date
    author: str
    subject: str
    release: str  # Cosmetic name derived from full_id

    model_config = {"frozen": True}

    @property
    def is_multiline(self) -> bool:
        """Check if the subject carries more than one line."""
        return "\n" in self.subject

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the record."""
        return self.model_dump()
