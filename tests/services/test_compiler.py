"""Tests for DocumentCompiler."""

from pathlib import Path

import pytest

from bookctl.domain.errors import ToolInvocationError
from bookctl.services.compiler import DocumentCompiler
from bookctl.services.preprocess import TextPreprocessor
from bookctl.services.snippets import SnippetExtractor
from tests.conftest import FakeRunner, FakeVersionControl, set_mtime


@pytest.fixture
def target(tmp_path: Path) -> Path:
    path = tmp_path / "target"
    path.mkdir()
    return path


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "book.latex"
    path.write_text("\\includegraphics{GRAPHICS_OUTPUT_DIR/flow.pdf}", encoding="utf-8")
    return path


def _compiler(target: Path, runner: FakeRunner, builder: str = "pdflatex") -> DocumentCompiler:
    pre = TextPreprocessor(
        SnippetExtractor(FakeVersionControl()),
        target_dir=target,
        images_dir=target,
    )
    return DocumentCompiler(pre, runner, builder=builder)


class TestDocumentCompiler:
    def test_invocation_arguments(self, target: Path, document: Path) -> None:
        runner = FakeRunner()
        assert _compiler(target, runner).compile(document, needs_rebuild=False) is True
        assert runner.calls == [
            [
                "pdflatex",
                f"-output-directory={target}",
                "-jobname=book",
                "-halt-on-error",
                str(target / "book.tmp.latex"),
            ]
        ]

    def test_temp_file_always_refreshed(self, target: Path, document: Path) -> None:
        (target / "book.pdf").write_bytes(b"pdf")
        set_mtime(document, 1_000)
        set_mtime(target / "book.pdf", 2_000)
        runner = FakeRunner()

        assert _compiler(target, runner).compile(document, needs_rebuild=False) is False

        assert runner.calls == []
        tmp = target / "book.tmp.latex"
        assert tmp.read_text(encoding="utf-8") == f"\\includegraphics{{{target}/flow.pdf}}"

    def test_verdict_forces_compile(self, target: Path, document: Path) -> None:
        (target / "book.pdf").write_bytes(b"pdf")
        set_mtime(document, 1_000)
        set_mtime(target / "book.pdf", 2_000)
        runner = FakeRunner()
        assert _compiler(target, runner).compile(document, needs_rebuild=True) is True
        assert len(runner.calls) == 1

    def test_stale_pdf_compiles(self, target: Path, document: Path) -> None:
        (target / "book.pdf").write_bytes(b"pdf")
        set_mtime(document, 2_000)
        set_mtime(target / "book.pdf", 1_000)
        assert _compiler(target, FakeRunner()).compile(document, needs_rebuild=False) is True

    def test_custom_builder(self, target: Path, document: Path) -> None:
        runner = FakeRunner()
        _compiler(target, runner, builder="xelatex").compile(document, needs_rebuild=True)
        assert runner.calls[0][0] == "xelatex"

    def test_failure_names_document(self, target: Path, document: Path) -> None:
        runner = FakeRunner(failing=["pdflatex"])
        with pytest.raises(ToolInvocationError) as exc_info:
            _compiler(target, runner).compile(document, needs_rebuild=True)
        assert str(document) in exc_info.value.message
        assert exc_info.value.detail["output"] == "! Emergency stop."
