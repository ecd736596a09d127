"""Tests for the doop-git command line interface."""

import json
import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner
from git import Repo

from doop_git.cli.main import main
from doop_git.core.config import BOOKMARKS_FILENAME, find_project_root


@pytest.fixture
def temp_git_project():
    """Create a temporary git repository with three commits."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)
        repo = Repo.init(project_path)

        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        for message in ["Initial commit", "Add login", "Fix login\n\nCloses #12"]:
            (project_path / "app.py").write_text(message)
            repo.index.add(["app.py"])
            repo.index.commit(message)

        yield project_path


def run(project_path, *args):
    runner = CliRunner()
    return runner.invoke(main, ["--root", str(project_path), *args])


def test_current_json(temp_git_project):
    result = run(temp_git_project, "current", "--json")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["subject"] == "Fix login"
    assert data["author"] == "Test User"
    assert data["release"]


def test_current_table(temp_git_project):
    result = run(temp_git_project, "current")

    assert result.exit_code == 0
    assert "Fix login" in result.output


def test_history_json(temp_git_project):
    result = run(temp_git_project, "history", "--limit", "2", "--json")

    assert result.exit_code == 0
    subjects = [r["subject"] for r in json.loads(result.output)]
    assert subjects == ["Fix login", "Add login"]


def test_history_full_message(temp_git_project):
    result = run(temp_git_project, "history", "--limit", "1", "--full-message", "--json")

    assert result.exit_code == 0
    assert json.loads(result.output)[0]["subject"] == "Fix login\n\nCloses #12"


def test_history_rejects_zero_limit(temp_git_project):
    result = run(temp_git_project, "history", "--limit", "0")
    assert result.exit_code != 0


def test_since_drains_bookmark(temp_git_project):
    """Test that `since` reports new commits once, oldest first."""
    first = run(temp_git_project, "since", "deploy", "--json")
    assert first.exit_code == 0
    assert json.loads(first.output) == []

    repo = Repo(temp_git_project)
    for message in ["Add profile", "Add avatar"]:
        (temp_git_project / "app.py").write_text(message)
        repo.index.add(["app.py"])
        repo.index.commit(message)

    second = run(temp_git_project, "since", "deploy", "--json")
    assert second.exit_code == 0
    assert [r["subject"] for r in json.loads(second.output)] == [
        "Add profile",
        "Add avatar",
    ]

    bookmarks = json.loads(
        (temp_git_project / ".git" / BOOKMARKS_FILENAME).read_text()
    )
    assert bookmarks["deploy"] == repo.head.commit.hexsha[: len(bookmarks["deploy"])]


def test_since_strict_unknown_commit(temp_git_project):
    (temp_git_project / ".git" / BOOKMARKS_FILENAME).write_text(
        json.dumps({"deploy": "0000000"})
    )

    result = run(temp_git_project, "since", "deploy", "--strict")

    assert result.exit_code != 0
    assert "resync" in result.output


def test_bookmarks_list_and_forget(temp_git_project):
    run(temp_git_project, "since", "deploy")

    listed = run(temp_git_project, "bookmarks", "--json")
    assert listed.exit_code == 0
    assert list(json.loads(listed.output)) == ["deploy"]

    forgotten = run(temp_git_project, "bookmarks", "--forget", "deploy")
    assert forgotten.exit_code == 0
    assert "Removed bookmark" in forgotten.output

    listed = run(temp_git_project, "bookmarks", "--json")
    assert json.loads(listed.output) == {}


def test_custom_bookmarks_file(temp_git_project):
    marks = temp_git_project / "marks.json"
    result = run(temp_git_project, "--bookmarks-file", str(marks), "since", "deploy")

    assert result.exit_code == 0
    assert list(json.loads(marks.read_text())) == ["deploy"]


def test_missing_git_binary(temp_git_project):
    result = run(temp_git_project, "--git", "doop-git-no-such-binary", "current")

    assert result.exit_code != 0
    assert "available" in result.output


def test_find_project_root_from_subdirectory(temp_git_project):
    subdir = temp_git_project / "src" / "pkg"
    subdir.mkdir(parents=True)

    assert find_project_root(subdir).resolve() == temp_git_project.resolve()


def test_find_project_root_outside_repository():
    with tempfile.TemporaryDirectory() as temp_dir:
        assert find_project_root(Path(temp_dir)) is None


def test_cli_import_does_not_load_gitpython():
    """Test that GitPython is only loaded when the root must be discovered."""
    env = os.environ.copy()
    src = str(Path(__file__).resolve().parent.parent / "src")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src, env.get("PYTHONPATH")]))

    result = subprocess.run(  # noqa: S603
        [
            sys.executable,
            "-c",
            "import sys, doop_git.cli.main; print('git' in sys.modules)",
        ],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "False"


def test_explicit_root_with_custom_git_binary(temp_git_project):
    git_path = shutil.which("git")
    result = run(temp_git_project, "--git", git_path, "current", "--json")

    assert result.exit_code == 0
    assert json.loads(result.output)["subject"] == "Fix login"
