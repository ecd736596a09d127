"""Data models for doop-git."""

from .commit import CommitRecord

__all__ = ["CommitRecord"]
