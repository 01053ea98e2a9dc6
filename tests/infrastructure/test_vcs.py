"""Tests for GitRepository — branch detection, working tree, history."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from bookctl.infrastructure.runner import CommandResult
from bookctl.infrastructure.vcs import GitRepository


class ScriptedRunner:
    """Answers git commands from a dict keyed by the argument tuple."""

    def __init__(self, replies: dict[tuple[str, ...], CommandResult]) -> None:
        self.replies = replies
        self.calls: list[tuple[list[str], Path | None]] = []

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        self.calls.append((list(args), cwd))
        return self.replies.get(tuple(args), CommandResult(args=list(args), returncode=128))


def _ok(args: list[str], stdout: str) -> CommandResult:
    return CommandResult(args=args, returncode=0, stdout=stdout)


class TestGitRepositoryParsing:
    def test_current_branch_from_star(self, tmp_path: Path) -> None:
        runner = ScriptedRunner(
            {("git", "branch"): _ok(["git", "branch"], "  chapter-1\n* main\n  old\n")}
        )
        repo = GitRepository(tmp_path, runner)
        assert repo.current_branch() == "main"
        assert runner.calls == [(["git", "branch"], tmp_path)]

    def test_no_current_branch(self, tmp_path: Path) -> None:
        runner = ScriptedRunner({("git", "branch"): _ok(["git", "branch"], "")})
        assert GitRepository(tmp_path, runner).current_branch() is None

    def test_branch_failure_is_none(self, tmp_path: Path) -> None:
        assert GitRepository(tmp_path, ScriptedRunner({})).current_branch() is None

    def test_show_historical(self, tmp_path: Path) -> None:
        args = ["git", "show", "chapter-1:core/A.scala"]
        runner = ScriptedRunner({tuple(args): _ok(args, "object A\n")})
        repo = GitRepository(tmp_path, runner)
        assert repo.show_historical("chapter-1", "core/A.scala") == "object A\n"

    def test_show_failure_is_empty(self, tmp_path: Path) -> None:
        repo = GitRepository(tmp_path, ScriptedRunner({}))
        assert repo.show_historical("nope", "missing.scala") == ""

    def test_read_working_file(self, tmp_path: Path) -> None:
        (tmp_path / "core").mkdir()
        (tmp_path / "core" / "A.scala").write_text("object A\n", encoding="utf-8")
        repo = GitRepository(tmp_path, ScriptedRunner({}))
        assert repo.read_working_file("core/A.scala") == "object A\n"
        assert repo.read_working_file("core/B.scala") == ""

    def test_read_working_file_latin1(self, tmp_path: Path) -> None:
        (tmp_path / "A.scala").write_bytes(b"val caf\xe9 = 1\n")
        repo = GitRepository(tmp_path, ScriptedRunner({}))
        assert repo.read_working_file("A.scala") == "val caf\ufffd = 1\n"


# ---------------------------------------------------------------------------
# Real git
# ---------------------------------------------------------------------------


def _git(cwd: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


@pytest.fixture
def git_source(tmp_path: Path) -> Path:
    """Repository on branch ``main`` with a ``chapter-1`` branch holding older code."""
    root = tmp_path / "src"
    root.mkdir()
    _git(root, "init")
    _git(root, "config", "user.email", "test@test.com")
    _git(root, "config", "user.name", "Test")
    _git(root, "checkout", "-b", "chapter-1")
    (root / "Actor.scala").write_text("class Actor // v1\n", encoding="utf-8")
    _git(root, "add", ".")
    _git(root, "commit", "-m", "v1")
    _git(root, "checkout", "-b", "main")
    (root / "Actor.scala").write_text("class Actor // v2\n", encoding="utf-8")
    _git(root, "commit", "-am", "v2")
    (root / "Actor.scala").write_text("class Actor // uncommitted\n", encoding="utf-8")
    return root


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestGitRepositoryReal:
    def test_current_branch(self, git_source: Path) -> None:
        assert GitRepository(git_source).current_branch() == "main"

    def test_working_tree_sees_uncommitted(self, git_source: Path) -> None:
        repo = GitRepository(git_source)
        assert repo.read_working_file("Actor.scala") == "class Actor // uncommitted\n"

    def test_history_of_other_branch(self, git_source: Path) -> None:
        repo = GitRepository(git_source)
        assert repo.show_historical("chapter-1", "Actor.scala") == "class Actor // v1\n"

    def test_history_missing_file(self, git_source: Path) -> None:
        assert GitRepository(git_source).show_historical("chapter-1", "Nope.scala") == ""

    def test_not_a_repository(self, tmp_path: Path) -> None:
        repo = GitRepository(tmp_path / "missing")
        assert repo.current_branch() is None
        assert repo.show_historical("main", "A.scala") == ""
