"""Runtime settings shared by the history and bookmark components."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

BOOKMARKS_FILENAME = "doop-git-bookmarks.json"


class Settings(BaseModel):
    """Settings for one application checkout.

    Passed explicitly to every component instead of being read from
    process-wide state.
    """

    root: Path
    bookmarks_file: Optional[Path] = None
    git_binary: str = "git"
    window: int = Field(default=30, ge=1)
    timeout: float = Field(default=30.0, gt=0)

    @property
    def bookmarks_path(self) -> Path:
        """Get the bookmark file location, defaulting to inside ``.git``."""
        if self.bookmarks_file is None:
            return self.root / ".git" / BOOKMARKS_FILENAME
        if self.bookmarks_file.is_absolute():
            return self.bookmarks_file
        return self.root / self.bookmarks_file


def find_project_root(start: Optional[Path] = None) -> Optional[Path]:
    """Find the working tree root of the repository containing ``start``."""
    # GitPython looks for a git executable on import
    import git

    start = Path(start or Path.cwd()).resolve()
    try:
        repo = git.Repo(start, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
        return None

    if repo.working_tree_dir is None:
        return None
    return Path(repo.working_tree_dir)
