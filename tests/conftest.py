"""Shared pytest fixtures and test doubles for bookctl tests."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

from bookctl.config.settings import BookSettings
from bookctl.infrastructure.runner import CommandResult
from bookctl.services.build import BuildService

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeVersionControl:
    """In-memory repository: one checked-out branch plus committed files."""

    def __init__(
        self,
        branch: str | None = "main",
        working: dict[str, str] | None = None,
        history: dict[tuple[str, str], str] | None = None,
    ) -> None:
        self.branch = branch
        self.working = dict(working or {})
        self.history = dict(history or {})
        self.historical_calls: list[tuple[str, str]] = []
        self.working_calls: list[str] = []

    def current_branch(self) -> str | None:
        return self.branch

    def read_working_file(self, path: str) -> str:
        self.working_calls.append(path)
        return self.working.get(path, "")

    def show_historical(self, branch: str, path: str) -> str:
        self.historical_calls.append((branch, path))
        return self.history.get((branch, path), "")


class FakeRunner:
    """Records commands and imitates dot/neato and the LaTeX engine.

    Successful runs create the artifact the real tool would write, so a
    second build sees it as current. Commands listed in *failing* exit 1.
    """

    def __init__(self, failing: Sequence[str] = ()) -> None:
        self.failing = set(failing)
        self.calls: list[list[str]] = []

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        argv = [str(a) for a in args]
        self.calls.append(argv)
        if argv[0] in self.failing:
            return CommandResult(args=argv, returncode=1, stdout="! Emergency stop.")
        if "-o" in argv:
            Path(argv[argv.index("-o") + 1]).write_bytes(b"%PDF-diagram")
        outdir = next((a.split("=", 1)[1] for a in argv if a.startswith("-output-directory=")), None)
        job = next((a.split("=", 1)[1] for a in argv if a.startswith("-jobname=")), None)
        if outdir and job:
            (Path(outdir) / f"{job}.pdf").write_bytes(b"%PDF-book")
        return CommandResult(args=argv, returncode=0)

    def commands(self, name: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == name]


def set_mtime(path: Path, seconds: float) -> None:
    """Pin both atime and mtime of *path*."""
    os.utime(path, (seconds, seconds))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def book_root(tmp_path: Path) -> Path:
    """Project directory with the default book layout and no sources."""
    (tmp_path / "src" / "book" / "latex").mkdir(parents=True)
    (tmp_path / "src" / "book" / "graphviz").mkdir(parents=True)
    (tmp_path / "src" / "book" / "images").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def settings(book_root: Path) -> BookSettings:
    return BookSettings.from_cli(project_root=book_root)


@pytest.fixture
def fake_vcs() -> FakeVersionControl:
    return FakeVersionControl()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def service(
    settings: BookSettings,
    fake_runner: FakeRunner,
    fake_vcs: FakeVersionControl,
) -> BuildService:
    """BuildService wired to the fakes."""
    return BuildService(settings, runner=fake_runner, vcs=fake_vcs)


@pytest.fixture
def _isolated_book(book_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from inside a temp book project."""
    monkeypatch.chdir(book_root)
    monkeypatch.delenv("BOOKCTL_CONFIG", raising=False)
